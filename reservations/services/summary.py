from django.db.models import Count, Q
from django.utils import timezone

from reservations.models import Reservation


def reservation_summary(*, now=None):
    """
    Returns reservation counts for the admin dashboard:
    total, pending, approved, cancelled, active (pending or approved and
    not finished yet) and completed (approved and already finished).
    """
    now = now or timezone.now()

    return Reservation.objects.aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status=Reservation.Status.PENDING)),
        approved=Count("id", filter=Q(status=Reservation.Status.APPROVED)),
        cancelled=Count("id", filter=Q(status=Reservation.Status.CANCELLED)),
        active=Count(
            "id",
            filter=Q(status__in=Reservation.ACTIVE_STATUSES, end_time__gt=now),
        ),
        completed=Count(
            "id",
            filter=Q(status=Reservation.Status.APPROVED, end_time__lte=now),
        ),
    )
