from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from django.conf import settings
from django.db.models import Q
from django.utils import timezone

from reservations.exceptions import ReservationValidationError
from reservations.models import Reservation


def local_day_bounds(day):
    """
    Returns [local midnight, next local midnight) for the given date.
    """
    day_start = timezone.make_aware(datetime.combine(day, time.min))
    day_end = timezone.make_aware(datetime.combine(day + timedelta(days=1), time.min))
    return day_start, day_end


def parse_bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ReservationQuery:
    """
    Filters and pagination for reservation listings.

    day narrows to reservations starting on that local date, status to a
    single stored status. With include_completed=False, approved
    reservations that already ended are left out.
    """

    day: Optional[date] = None
    status: Optional[Reservation.Status] = None
    include_completed: bool = True
    page: int = 1
    limit: Optional[int] = None

    def __post_init__(self):
        if self.limit is None:
            object.__setattr__(self, "limit", settings.BOOKING_DEFAULT_PAGE_SIZE)
        if self.page < 1:
            raise ReservationValidationError("page must be at least 1")
        if not 1 <= self.limit <= settings.BOOKING_MAX_PAGE_SIZE:
            raise ReservationValidationError(
                f"limit must be between 1 and {settings.BOOKING_MAX_PAGE_SIZE}"
            )

    @classmethod
    def from_params(cls, params):
        """
        Builds a query from request parameters (date, status, page, limit,
        show_completed). Malformed values raise ReservationValidationError.
        """
        day = None
        if params.get("date"):
            try:
                day = date.fromisoformat(params["date"])
            except ValueError:
                raise ReservationValidationError("Invalid date format (YYYY-MM-DD)")

        status = None
        if params.get("status"):
            try:
                status = Reservation.Status(params["status"].upper())
            except ValueError:
                raise ReservationValidationError("Invalid status")

        try:
            page = int(params.get("page") or 1)
            limit = int(params["limit"]) if params.get("limit") else None
        except ValueError:
            raise ReservationValidationError("page and limit must be integers")

        include_completed = True
        if params.get("show_completed") not in (None, ""):
            include_completed = parse_bool(params["show_completed"])

        return cls(
            day=day,
            status=status,
            include_completed=include_completed,
            page=page,
            limit=limit,
        )

    def to_q(self, now):
        q = Q()

        if self.day is not None:
            day_start, day_end = local_day_bounds(self.day)
            q &= Q(start_time__gte=day_start, start_time__lt=day_end)

        if self.status is not None:
            q &= Q(status=self.status)

        if not self.include_completed:
            q &= ~Q(status=Reservation.Status.APPROVED, end_time__lte=now)

        return q
