import logging

from django.core.exceptions import ValidationError

from reservations.exceptions import (
    ReservationNotFoundError,
    ReservationValidationError,
)
from rooms.models import Room

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "size", "tvs", "projectors", "capacity", "active")


def _save_validated(room):
    try:
        room.full_clean()
    except ValidationError as e:
        messages = [
            f"{field}: {' '.join(errors)}" for field, errors in e.message_dict.items()
        ]
        raise ReservationValidationError("; ".join(messages))
    room.save()
    return room


def create_room(*, name, capacity, size="", tvs=0, projectors=0):
    room = _save_validated(
        Room(
            name=name,
            size=size,
            tvs=tvs,
            projectors=projectors,
            capacity=capacity,
        )
    )
    logger.info("Room %s created", room.pk)
    return room


def list_rooms():
    return list(Room.objects.filter(active=True).order_by("-created_at"))


def get_room(room_id):
    room = Room.objects.filter(pk=room_id).first()
    if room is None:
        raise ReservationNotFoundError("room not found")
    return room


def update_room(room_id, **changes):
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ReservationValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

    room = get_room(room_id)
    for field, value in changes.items():
        setattr(room, field, value)

    _save_validated(room)
    logger.info("Room %s updated (%s)", room.pk, ", ".join(sorted(changes)))
    return room


def deactivate_room(room_id):
    """
    Soft delete: the room disappears from listings and cannot be booked,
    but keeps its reservation history.
    """
    room = get_room(room_id)
    room.active = False
    room.save(update_fields=["active"])
    logger.info("Room %s deactivated", room.pk)
    return room
