import logging

from django.contrib.auth import get_user_model
from django.core.paginator import Paginator
from django.db import transaction
from django.utils import timezone

from reservations.exceptions import (
    ReservationNotFoundError,
    ReservationStateError,
)
from reservations.models import Reservation
from reservations.services.conflicts import (
    check_room_availability,
    check_user_exclusivity,
)
from reservations.services.policies import (
    can_see_all_reservations,
    initial_status_for,
)
from reservations.services.queries import ReservationQuery
from reservations.services.validation import validate_time_slot
from rooms.models import Room

logger = logging.getLogger(__name__)


def visible_reservations(user):
    """
    Admins see every reservation, everybody else only their own.
    """
    if can_see_all_reservations(user):
        return Reservation.objects.all()
    return Reservation.objects.filter(user=user)


@transaction.atomic
def create_reservation(*, user, room_id, start_time, end_time, expected_duration, now=None):
    now = now or timezone.now()

    validate_time_slot(start_time, end_time, expected_duration, now=now)

    # Row locks on the room and the user serialize concurrent creates, so the
    # checks below and the insert act as a single unit
    room = Room.objects.select_for_update().filter(pk=room_id, active=True).first()
    if room is None:
        raise ReservationNotFoundError("room not found or inactive")

    get_user_model().objects.select_for_update().filter(pk=user.pk).first()

    check_user_exclusivity(user, start_time, now=now)
    check_room_availability(room, start_time, end_time)

    reservation = Reservation.objects.create(
        user=user,
        room=room,
        start_time=start_time,
        end_time=end_time,
        expected_duration=expected_duration,
        status=initial_status_for(user),
    )

    logger.info(
        "Reservation %s created for user %s in room %s (%s)",
        reservation.pk,
        user.pk,
        room.pk,
        reservation.status,
    )
    return reservation


def get_reservation(*, reservation_id, user):
    reservation = (
        visible_reservations(user)
        .select_related("room", "user")
        .filter(pk=reservation_id)
        .first()
    )
    # someone else's reservation looks exactly like a missing one
    if reservation is None:
        raise ReservationNotFoundError("not found")
    return reservation


def list_reservations(*, user, query=None, now=None):
    """
    Returns a django Page of the reservations the user may see, newest first.
    """
    now = now or timezone.now()
    query = query or ReservationQuery()

    reservations = (
        visible_reservations(user)
        .filter(query.to_q(now))
        .select_related("room", "user")
        .order_by("-created_at", "-id")
    )

    paginator = Paginator(reservations, query.limit)
    return paginator.get_page(query.page)


@transaction.atomic
def approve_reservation(*, reservation_id):
    reservation = (
        Reservation.objects.select_for_update()
        .filter(pk=reservation_id)
        .first()
    )
    if reservation is None:
        raise ReservationNotFoundError("not found")

    if reservation.status != Reservation.Status.PENDING:
        raise ReservationStateError("already processed")

    # another request for the same slot may have been approved meanwhile
    room = Room.objects.select_for_update().get(pk=reservation.room_id)
    check_room_availability(room, reservation.start_time, reservation.end_time)

    reservation.status = Reservation.Status.APPROVED
    reservation.save(update_fields=["status"])

    logger.info("Reservation %s approved", reservation.pk)
    return reservation


@transaction.atomic
def cancel_reservation(*, reservation_id, user):
    reservation = (
        visible_reservations(user)
        .select_for_update()
        .filter(pk=reservation_id)
        .first()
    )
    if reservation is None:
        raise ReservationNotFoundError("not found")

    if reservation.status == Reservation.Status.CANCELLED:
        raise ReservationStateError("already cancelled")

    reservation.status = Reservation.Status.CANCELLED
    reservation.save(update_fields=["status"])

    logger.info("Reservation %s cancelled by user %s", reservation.pk, user.pk)
    return reservation
