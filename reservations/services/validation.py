import logging

from django.conf import settings
from django.utils import timezone

from reservations.exceptions import ReservationValidationError

logger = logging.getLogger(__name__)


def to_local(value):
    """
    Returns value in the configured local timezone. Naive datetimes are
    taken to already be local civil time.
    """
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return timezone.localtime(value)


def _on_slot_boundary(value):
    return (
        value.minute % settings.BOOKING_SLOT_MINUTES == 0
        and value.second == 0
        and value.microsecond == 0
    )


def validate_time_slot(start_time, end_time, expected_duration, *, now=None):
    """
    Checks a proposed interval against slot granularity, operating hours
    and the duration catalog. Stops at the first broken rule and raises
    ReservationValidationError with its reason.
    """
    now = now or timezone.now()
    opening_hour = settings.BOOKING_OPENING_HOUR
    closing_hour = settings.BOOKING_CLOSING_HOUR

    start = to_local(start_time)
    end = to_local(end_time)

    if not _on_slot_boundary(start):
        raise ReservationValidationError("start must be on 30-minute boundary")

    if not _on_slot_boundary(end):
        raise ReservationValidationError("end must be on 30-minute boundary")

    if not opening_hour <= start.hour < closing_hour:
        raise ReservationValidationError("start must be within operating hours")

    # the day closes at 18:00 sharp, so 18:00 is the only valid hour-18 end
    if (
        not opening_hour <= end.hour <= closing_hour
        or (end.hour == closing_hour and end.minute != 0)
    ):
        raise ReservationValidationError("end must be within operating hours")

    if expected_duration not in settings.BOOKING_ALLOWED_DURATIONS:
        raise ReservationValidationError("invalid duration")

    duration_minutes = (end - start).total_seconds() / 60
    if duration_minutes != expected_duration:
        raise ReservationValidationError("duration mismatch")

    if start < now:
        raise ReservationValidationError("cannot book in the past")

    logger.debug("Slot %s-%s passed validation", start, end)
