from django.conf import settings
from django.db import models
from django.db.models import Q


class ReservationQuerySet(models.QuerySet):
    def approved(self):
        return self.filter(status=Reservation.Status.APPROVED)

    def not_cancelled(self):
        return self.filter(status__in=Reservation.ACTIVE_STATUSES)

    def active(self, now):
        """
        Pending or approved reservations that have not finished yet.
        """
        return self.not_cancelled().filter(end_time__gt=now)

    def overlapping(self, start_time, end_time):
        # half-open intervals: touching endpoints do not overlap
        return self.filter(start_time__lt=end_time, end_time__gt=start_time)

    def starting_between(self, window_start, window_end):
        return self.filter(start_time__gte=window_start, start_time__lt=window_end)

    def touching_day(self, day_start, day_end):
        """
        Reservations that start inside [day_start, day_end) or started
        earlier and are still running at day_start.
        """
        return self.filter(
            Q(start_time__gte=day_start, start_time__lt=day_end)
            | Q(start_time__lt=day_start, end_time__gt=day_start)
        )


class Reservation(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        CANCELLED = "CANCELLED", "Cancelled"

    # derived for display only, never stored
    COMPLETED = "COMPLETED"

    ACTIVE_STATUSES = [Status.PENDING, Status.APPROVED]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reservations",
    )
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.PROTECT,
        related_name="reservations",
    )

    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    expected_duration = models.PositiveSmallIntegerField()

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    objects = ReservationQuerySet.as_manager()

    @staticmethod
    def overlapping_exists(room, start_time, end_time):
        return (
            Reservation.objects.approved()
            .filter(room=room)
            .overlapping(start_time, end_time)
            .exists()
        )

    def is_completed(self, now):
        return self.status == self.Status.APPROVED and self.end_time <= now

    def display_status(self, now):
        if self.is_completed(now):
            return self.COMPLETED
        return self.status

    class Meta:
        indexes = [
            models.Index(fields=["room", "start_time"], name="reservation_room_start_idx"),
            models.Index(fields=["user", "start_time"], name="reservation_user_start_idx"),
        ]
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.room} | {self.start_time:%Y-%m-%d %H:%M}-{self.end_time:%H:%M}"
