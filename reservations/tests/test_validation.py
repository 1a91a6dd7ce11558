from datetime import datetime

from django.test import SimpleTestCase, override_settings

from reservations.exceptions import ReservationValidationError
from reservations.services.validation import validate_time_slot
from reservations.tests.helpers import local_dt

NOW = local_dt(2024, 6, 1, 12, 0)


class TimeSlotValidationTest(SimpleTestCase):
    def assertRejected(self, start_time, end_time, duration, message, now=NOW):
        with self.assertRaises(ReservationValidationError) as context:
            validate_time_slot(start_time, end_time, duration, now=now)
        self.assertEqual(context.exception.message, message)

    def test_valid_slot_passes(self):
        validate_time_slot(
            local_dt(2024, 6, 10, 9, 0),
            local_dt(2024, 6, 10, 10, 30),
            90,
            now=NOW,
        )

    def test_every_catalog_duration_is_accepted(self):
        for duration in (60, 90, 120, 150, 180):
            with self.subTest(duration=duration):
                start = local_dt(2024, 6, 10, 8, 0)
                end = local_dt(2024, 6, 10, 8 + duration // 60, duration % 60)
                validate_time_slot(start, end, duration, now=NOW)

    def test_start_off_boundary(self):
        for minute in (1, 15, 29, 45, 59):
            with self.subTest(minute=minute):
                self.assertRejected(
                    local_dt(2024, 6, 10, 9, minute),
                    local_dt(2024, 6, 10, 11, 0),
                    120,
                    "start must be on 30-minute boundary",
                )

    def test_start_with_seconds_is_off_boundary(self):
        self.assertRejected(
            local_dt(2024, 6, 10, 9, 0, 30),
            local_dt(2024, 6, 10, 10, 0),
            60,
            "start must be on 30-minute boundary",
        )

    def test_end_off_boundary(self):
        self.assertRejected(
            local_dt(2024, 6, 10, 9, 0),
            local_dt(2024, 6, 10, 10, 15),
            60,
            "end must be on 30-minute boundary",
        )

    # Start boundary is reported before end boundary
    def test_start_checked_before_end(self):
        self.assertRejected(
            local_dt(2024, 6, 10, 9, 10),
            local_dt(2024, 6, 10, 10, 15),
            60,
            "start must be on 30-minute boundary",
        )

    def test_start_before_opening(self):
        self.assertRejected(
            local_dt(2024, 6, 10, 7, 30),
            local_dt(2024, 6, 10, 8, 30),
            60,
            "start must be within operating hours",
        )

    def test_start_at_closing(self):
        self.assertRejected(
            local_dt(2024, 6, 10, 18, 0),
            local_dt(2024, 6, 10, 19, 0),
            60,
            "start must be within operating hours",
        )

    def test_end_at_closing_is_allowed(self):
        validate_time_slot(
            local_dt(2024, 6, 10, 17, 0),
            local_dt(2024, 6, 10, 18, 0),
            60,
            now=NOW,
        )

    def test_end_after_closing(self):
        self.assertRejected(
            local_dt(2024, 6, 10, 16, 30),
            local_dt(2024, 6, 10, 18, 30),
            120,
            "end must be within operating hours",
        )

    def test_duration_outside_catalog(self):
        self.assertRejected(
            local_dt(2024, 6, 10, 9, 0),
            local_dt(2024, 6, 10, 9, 30),
            30,
            "invalid duration",
        )
        self.assertRejected(
            local_dt(2024, 6, 10, 9, 0),
            local_dt(2024, 6, 10, 12, 30),
            210,
            "invalid duration",
        )

    def test_duration_mismatch(self):
        self.assertRejected(
            local_dt(2024, 6, 10, 9, 0),
            local_dt(2024, 6, 10, 10, 0),
            90,
            "duration mismatch",
        )

    def test_end_before_start_is_a_mismatch(self):
        self.assertRejected(
            local_dt(2024, 6, 10, 11, 0),
            local_dt(2024, 6, 10, 10, 0),
            60,
            "duration mismatch",
        )

    def test_past_start(self):
        self.assertRejected(
            local_dt(2024, 6, 1, 9, 0),
            local_dt(2024, 6, 1, 10, 0),
            60,
            "cannot book in the past",
        )

    def test_start_equal_to_now_is_allowed(self):
        validate_time_slot(
            local_dt(2024, 6, 1, 12, 0),
            local_dt(2024, 6, 1, 13, 0),
            60,
            now=NOW,
        )

    def test_same_invalid_input_gives_same_error(self):
        args = (local_dt(2024, 6, 10, 9, 0), local_dt(2024, 6, 10, 10, 0), 90)

        messages = []
        for _ in range(2):
            with self.assertRaises(ReservationValidationError) as context:
                validate_time_slot(*args, now=NOW)
            messages.append(context.exception.message)

        self.assertEqual(messages, ["duration mismatch", "duration mismatch"])

    def test_naive_datetimes_are_local_time(self):
        validate_time_slot(
            datetime(2024, 6, 10, 9, 0),
            datetime(2024, 6, 10, 10, 0),
            60,
            now=NOW,
        )

    @override_settings(BOOKING_CLOSING_HOUR=20)
    def test_operating_hours_come_from_settings(self):
        validate_time_slot(
            local_dt(2024, 6, 10, 18, 30),
            local_dt(2024, 6, 10, 19, 30),
            60,
            now=NOW,
        )
