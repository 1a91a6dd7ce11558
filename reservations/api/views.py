import json
import logging
from datetime import date as date_type

from django.http import JsonResponse
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from reservations.api.errors import error_response, reservation_error_response
from reservations.exceptions import ReservationError
from reservations.services import (
    ReservationQuery,
    approve_reservation,
    available_start_times,
    cancel_reservation,
    create_reservation,
    get_reservation,
    list_reservations,
    occupied_slot_starts,
    occupied_slots,
    reservation_summary,
    room_agenda,
)

logger = logging.getLogger(__name__)


def parse_local_datetime(value):
    """
    Parses an ISO 8601 string. Values without an offset are local time.
    Returns None when the value is missing or malformed.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = parse_datetime(value)
    except ValueError:
        return None
    if parsed is None:
        return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def parse_day(value):
    try:
        return date_type.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def user_to_dict(user):
    return {
        "id": user.id,
        "username": user.username,
        "name": user.get_full_name(),
        "email": user.email,
    }


def reservation_to_dict(reservation, now, include_user=False):
    data = {
        "id": reservation.id,
        "room_id": reservation.room_id,
        "room": reservation.room.name,
        "user_id": reservation.user_id,
        "start_time": timezone.localtime(reservation.start_time).isoformat(),
        "end_time": timezone.localtime(reservation.end_time).isoformat(),
        "expected_duration": reservation.expected_duration,
        "status": reservation.status,
        "display_status": reservation.display_status(now),
        "created_at": reservation.created_at.isoformat(),
    }
    if include_user:
        data["user"] = user_to_dict(reservation.user)
    return data


@csrf_exempt
@require_http_methods(["GET", "POST"])
def reservations_view(request):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    if request.method == "POST":
        return _create_reservation(request)
    return _list_reservations(request)


def _create_reservation(request):
    try:
        data = json.loads(request.body)
    except json.JSONDecodeError:
        return error_response("Invalid JSON", 400)

    if not isinstance(data, dict):
        return error_response("Invalid JSON", 400)

    required_fields = {"room_id", "start_time", "end_time", "expected_duration"}
    if not required_fields.issubset(data):
        return error_response("Missing required fields", 400)

    start_time = parse_local_datetime(data["start_time"])
    end_time = parse_local_datetime(data["end_time"])
    if start_time is None or end_time is None:
        return error_response("Invalid date or time format", 400)

    for field in ("room_id", "expected_duration"):
        if not isinstance(data[field], int) or isinstance(data[field], bool):
            return error_response(f"{field} must be an integer", 400)
    expected_duration = data["expected_duration"]

    try:
        reservation = create_reservation(
            user=request.user,
            room_id=data["room_id"],
            start_time=start_time,
            end_time=end_time,
            expected_duration=expected_duration,
        )
    except ReservationError as e:
        logger.info("Reservation rejected for user %s: %s", request.user.pk, e.message)
        return reservation_error_response(e)

    return JsonResponse(
        reservation_to_dict(reservation, timezone.now()),
        status=201,
    )


def _list_reservations(request):
    try:
        query = ReservationQuery.from_params(request.GET)
    except ReservationError as e:
        return reservation_error_response(e)

    now = timezone.now()
    page = list_reservations(user=request.user, query=query, now=now)

    return JsonResponse(
        {
            "reservations": [
                reservation_to_dict(r, now, include_user=request.user.is_admin)
                for r in page
            ],
            "total": page.paginator.count,
            "page": page.number,
            "limit": query.limit,
            "pages": page.paginator.num_pages,
        }
    )


@require_GET
def reservation_detail_view(request, reservation_id):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    try:
        reservation = get_reservation(reservation_id=reservation_id, user=request.user)
    except ReservationError as e:
        return reservation_error_response(e)

    return JsonResponse(reservation_to_dict(reservation, timezone.now(), include_user=True))


@csrf_exempt
@require_http_methods(["PATCH"])
def cancel_reservation_view(request, reservation_id):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    try:
        reservation = cancel_reservation(reservation_id=reservation_id, user=request.user)
    except ReservationError as e:
        return reservation_error_response(e)

    return JsonResponse(reservation_to_dict(reservation, timezone.now()))


@csrf_exempt
@require_http_methods(["PATCH"])
def approve_reservation_view(request, reservation_id):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    if not request.user.is_admin:
        return error_response("Admin role required", 403)

    try:
        reservation = approve_reservation(reservation_id=reservation_id)
    except ReservationError as e:
        return reservation_error_response(e)

    return JsonResponse(reservation_to_dict(reservation, timezone.now()))


@require_GET
def reservation_summary_view(request):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    if not request.user.is_admin:
        return error_response("Admin role required", 403)

    return JsonResponse(reservation_summary())


@require_GET
def occupied_slots_view(request, room_id):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    day = parse_day(request.GET.get("date"))
    if day is None:
        return error_response("Invalid date format (YYYY-MM-DD)", 400)

    try:
        slots = occupied_slots(room_id=room_id, day=day)
        slot_starts = occupied_slot_starts(room_id=room_id, day=day)
    except ReservationError as e:
        return reservation_error_response(e)

    return JsonResponse(
        {
            "room_id": room_id,
            "date": day.isoformat(),
            "reservations": [
                {
                    "start_time": timezone.localtime(start).isoformat(),
                    "end_time": timezone.localtime(end).isoformat(),
                }
                for start, end in slots
            ],
            "occupied": [slot.strftime("%H:%M") for slot in slot_starts],
        }
    )


@require_GET
def available_slots_view(request, room_id):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    day = parse_day(request.GET.get("date"))
    if day is None:
        return error_response("Invalid date format (YYYY-MM-DD)", 400)

    try:
        duration = int(request.GET.get("duration", 60))
    except ValueError:
        return error_response("duration must be an integer", 400)

    try:
        starts = available_start_times(
            room_id=room_id,
            day=day,
            expected_duration=duration,
            now=timezone.now(),
        )
    except ReservationError as e:
        return reservation_error_response(e)

    return JsonResponse(
        {
            "room_id": room_id,
            "date": day.isoformat(),
            "duration": duration,
            "starts": [start.strftime("%H:%M") for start in starts],
        }
    )


@require_GET
def room_agenda_view(request, room_id):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    day = None
    if request.GET.get("date"):
        day = parse_day(request.GET["date"])
        if day is None:
            return error_response("Invalid date format (YYYY-MM-DD)", 400)

    now = timezone.now()
    try:
        reservations = room_agenda(room_id=room_id, day=day, now=now)
    except ReservationError as e:
        return reservation_error_response(e)

    return JsonResponse(
        {
            "room_id": room_id,
            "date": day.isoformat() if day else None,
            "reservations": [
                {
                    "id": r.id,
                    "start_time": timezone.localtime(r.start_time).isoformat(),
                    "end_time": timezone.localtime(r.end_time).isoformat(),
                    "status": r.status,
                    "display_status": r.display_status(now),
                    "user": user_to_dict(r.user),
                }
                for r in reservations
            ],
        }
    )
