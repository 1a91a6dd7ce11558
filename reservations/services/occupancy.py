from datetime import datetime, time, timedelta

from django.conf import settings
from django.utils import timezone

from reservations.exceptions import (
    ReservationNotFoundError,
    ReservationValidationError,
)
from reservations.models import Reservation
from reservations.services.queries import local_day_bounds
from rooms.models import Room


def _get_room(room_id):
    room = Room.objects.filter(pk=room_id).first()
    if room is None:
        raise ReservationNotFoundError("room not found")
    return room


def occupied_slots(*, room_id, day):
    """
    Returns the (start_time, end_time) of every approved reservation that
    starts in the room on the given local day, earliest first.
    """
    room = _get_room(room_id)
    day_start, day_end = local_day_bounds(day)

    reservations = (
        Reservation.objects.approved()
        .filter(room=room)
        .starting_between(day_start, day_end)
        .order_by("start_time")
    )

    return [(r.start_time, r.end_time) for r in reservations]


def occupied_slot_starts(*, room_id, day):
    """
    Returns the sorted 30-minute slot starts covered by approved
    reservations on the given day. A reservation covering [start, end)
    marks every slot t with start <= t < end; the slot at end stays free.
    """
    room = _get_room(room_id)
    day_start, day_end = local_day_bounds(day)
    step = timedelta(minutes=settings.BOOKING_SLOT_MINUTES)

    reservations = (
        Reservation.objects.approved()
        .filter(room=room)
        .touching_day(day_start, day_end)
    )

    slots = set()
    for reservation in reservations:
        current = reservation.start_time
        while current < reservation.end_time:
            if day_start <= current < day_end:
                slots.add(timezone.localtime(current))
            current += step

    return sorted(slots)


def available_start_times(*, room_id, day, expected_duration, now=None):
    """
    Returns the local start times on the given day where a reservation of
    expected_duration minutes fits between approved reservations and inside
    operating hours. Starts before now are left out.
    """
    now = now or timezone.now()
    if expected_duration not in settings.BOOKING_ALLOWED_DURATIONS:
        raise ReservationValidationError("invalid duration")

    room = _get_room(room_id)
    day_start, day_end = local_day_bounds(day)

    opening = timezone.make_aware(datetime.combine(day, time(settings.BOOKING_OPENING_HOUR)))
    closing = timezone.make_aware(datetime.combine(day, time(settings.BOOKING_CLOSING_HOUR)))
    step = timedelta(minutes=settings.BOOKING_SLOT_MINUTES)
    duration = timedelta(minutes=expected_duration)

    reservations = (
        Reservation.objects.approved()
        .filter(room=room)
        .touching_day(day_start, day_end)
        .order_by("start_time")
    )

    # gaps between approved reservations, clipped to operating hours
    free_ranges = []
    current_start = opening

    for reservation in reservations:
        if reservation.start_time > current_start:
            free_ranges.append((current_start, min(reservation.start_time, closing)))
        current_start = max(current_start, reservation.end_time)

    if current_start < closing:
        free_ranges.append((current_start, closing))

    # every slot start in a gap that still fits the duration
    starts = []

    for start, end in free_ranges:
        candidate = start
        while candidate + duration <= end:
            if candidate >= now:
                starts.append(timezone.localtime(candidate))
            candidate += step

    return starts


def room_agenda(*, room_id, day=None, now=None):
    """
    Returns the pending and approved reservations of a room ordered by
    start time, with the requesting user loaded. With a day, only those
    starting that day; otherwise every reservation that has not ended.
    """
    now = now or timezone.now()
    room = _get_room(room_id)

    reservations = (
        Reservation.objects.not_cancelled()
        .filter(room=room)
        .select_related("user")
    )

    if day is not None:
        day_start, day_end = local_day_bounds(day)
        reservations = reservations.starting_between(day_start, day_end)
    else:
        reservations = reservations.filter(end_time__gt=now)

    return list(reservations.order_by("start_time"))


def available_rooms(*, start_time, end_time):
    if start_time >= end_time:
        raise ReservationValidationError("start_time must be before end_time")

    booked_room_ids = (
        Reservation.objects.approved()
        .overlapping(start_time, end_time)
        .values("room_id")
    )

    return list(
        Room.objects.filter(active=True)
        .exclude(pk__in=booked_room_ids)
        .order_by("-created_at")
    )
