from django.test import TestCase

from reservations.models import Reservation
from reservations.services import (
    room_overlap_exists,
    user_has_active_reservation_on_day,
)
from reservations.tests.helpers import local_dt, make_reservation, make_room, make_user

NOW = local_dt(2024, 6, 1, 12, 0)


class UserExclusivityTest(TestCase):
    def setUp(self):
        self.user = make_user("u1")
        self.room = make_room()

    def test_no_reservations(self):
        self.assertFalse(
            user_has_active_reservation_on_day(
                self.user, local_dt(2024, 6, 10, 9, 0), now=NOW
            )
        )

    def test_pending_same_day(self):
        make_reservation(
            self.user,
            self.room,
            local_dt(2024, 6, 10, 16, 0),
            local_dt(2024, 6, 10, 17, 0),
        )
        self.assertTrue(
            user_has_active_reservation_on_day(
                self.user, local_dt(2024, 6, 10, 9, 0), now=NOW
            )
        )

    def test_other_users_reservations_are_ignored(self):
        make_reservation(
            make_user("u2"),
            self.room,
            local_dt(2024, 6, 10, 9, 0),
            local_dt(2024, 6, 10, 10, 0),
        )
        self.assertFalse(
            user_has_active_reservation_on_day(
                self.user, local_dt(2024, 6, 10, 9, 0), now=NOW
            )
        )

    # Started the evening before, still running after midnight
    def test_reservation_spanning_into_the_day_counts(self):
        make_reservation(
            self.user,
            self.room,
            local_dt(2024, 6, 9, 23, 0),
            local_dt(2024, 6, 10, 1, 0),
            status=Reservation.Status.APPROVED,
        )
        self.assertTrue(
            user_has_active_reservation_on_day(
                self.user, local_dt(2024, 6, 10, 9, 0), now=NOW
            )
        )

    def test_reservation_ending_at_midnight_does_not_count(self):
        make_reservation(
            self.user,
            self.room,
            local_dt(2024, 6, 9, 22, 0),
            local_dt(2024, 6, 10, 0, 0),
            status=Reservation.Status.APPROVED,
        )
        self.assertFalse(
            user_has_active_reservation_on_day(
                self.user, local_dt(2024, 6, 10, 9, 0), now=NOW
            )
        )

    def test_previous_day_does_not_count(self):
        make_reservation(
            self.user,
            self.room,
            local_dt(2024, 6, 9, 9, 0),
            local_dt(2024, 6, 9, 10, 0),
        )
        self.assertFalse(
            user_has_active_reservation_on_day(
                self.user, local_dt(2024, 6, 10, 9, 0), now=NOW
            )
        )


class RoomOverlapTest(TestCase):
    def setUp(self):
        self.user = make_user("u1")
        self.room = make_room()
        make_reservation(
            self.user,
            self.room,
            local_dt(2024, 6, 10, 10, 0),
            local_dt(2024, 6, 10, 11, 0),
            status=Reservation.Status.APPROVED,
        )

    def test_overlaps(self):
        cases = [
            (local_dt(2024, 6, 10, 10, 30), local_dt(2024, 6, 10, 11, 30)),
            (local_dt(2024, 6, 10, 9, 30), local_dt(2024, 6, 10, 10, 30)),
            (local_dt(2024, 6, 10, 10, 0), local_dt(2024, 6, 10, 11, 0)),
            (local_dt(2024, 6, 10, 9, 0), local_dt(2024, 6, 10, 12, 0)),
        ]
        for start, end in cases:
            with self.subTest(start=start, end=end):
                self.assertTrue(room_overlap_exists(self.room, start, end))

    def test_touching_endpoints(self):
        self.assertFalse(
            room_overlap_exists(
                self.room, local_dt(2024, 6, 10, 9, 0), local_dt(2024, 6, 10, 10, 0)
            )
        )
        self.assertFalse(
            room_overlap_exists(
                self.room, local_dt(2024, 6, 10, 11, 0), local_dt(2024, 6, 10, 12, 0)
            )
        )

    def test_other_room_is_free(self):
        other_room = make_room("Beta")
        self.assertFalse(
            room_overlap_exists(
                other_room, local_dt(2024, 6, 10, 10, 0), local_dt(2024, 6, 10, 11, 0)
            )
        )

    def test_cancelled_reservation_does_not_overlap(self):
        Reservation.objects.update(status=Reservation.Status.CANCELLED)
        self.assertFalse(
            room_overlap_exists(
                self.room, local_dt(2024, 6, 10, 10, 0), local_dt(2024, 6, 10, 11, 0)
            )
        )
