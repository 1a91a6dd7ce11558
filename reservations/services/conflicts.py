import logging

from reservations.exceptions import ReservationConflictError
from reservations.models import Reservation
from reservations.services.queries import local_day_bounds
from reservations.services.validation import to_local

logger = logging.getLogger(__name__)


def user_has_active_reservation_on_day(user, start_time, *, now):
    """
    True when the user already holds a pending or approved reservation,
    not yet finished, on the local day that contains start_time.
    """
    day_start, day_end = local_day_bounds(to_local(start_time).date())

    return (
        Reservation.objects.filter(user=user)
        .active(now)
        .touching_day(day_start, day_end)
        .exists()
    )


def room_overlap_exists(room, start_time, end_time):
    # only approved reservations hold a room
    return Reservation.overlapping_exists(room, start_time, end_time)


def check_user_exclusivity(user, start_time, *, now):
    if user_has_active_reservation_on_day(user, start_time, now=now):
        logger.info(
            "User %s already has an active reservation on %s",
            user.pk,
            to_local(start_time).date(),
        )
        raise ReservationConflictError("user already has an active reservation this day")


def check_room_availability(room, start_time, end_time):
    if room_overlap_exists(room, start_time, end_time):
        logger.info("Room %s already booked between %s and %s", room.pk, start_time, end_time)
        raise ReservationConflictError("room already booked for that time")
