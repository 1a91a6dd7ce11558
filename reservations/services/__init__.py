from reservations.services.conflicts import (
    check_room_availability,
    check_user_exclusivity,
    room_overlap_exists,
    user_has_active_reservation_on_day,
)
from reservations.services.lifecycle import (
    approve_reservation,
    cancel_reservation,
    create_reservation,
    get_reservation,
    list_reservations,
    visible_reservations,
)
from reservations.services.occupancy import (
    available_rooms,
    available_start_times,
    occupied_slot_starts,
    occupied_slots,
    room_agenda,
)
from reservations.services.policies import initial_status_for
from reservations.services.queries import ReservationQuery, local_day_bounds
from reservations.services.summary import reservation_summary
from reservations.services.validation import validate_time_slot
