import json

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from reservations.api.errors import error_response, reservation_error_response
from reservations.api.views import parse_local_datetime
from reservations.exceptions import ReservationError
from reservations.services import available_rooms
from rooms.services import (
    EDITABLE_FIELDS,
    create_room,
    deactivate_room,
    get_room,
    list_rooms,
    update_room,
)


def room_to_dict(room):
    return {
        "id": room.id,
        "name": room.name,
        "size": room.size,
        "tvs": room.tvs,
        "projectors": room.projectors,
        "capacity": room.capacity,
        "active": room.active,
        "created_at": room.created_at.isoformat(),
    }


def _load_json(request):
    try:
        data = json.loads(request.body)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


@csrf_exempt
@require_http_methods(["GET", "POST"])
def rooms_view(request):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    if request.method == "POST":
        return _create_room(request)

    start_param = request.GET.get("start_time")
    end_param = request.GET.get("end_time")

    # with a window, only rooms free for the whole of it
    if start_param or end_param:
        start_time = parse_local_datetime(start_param)
        end_time = parse_local_datetime(end_param)
        if start_time is None or end_time is None:
            return error_response("start_time and end_time must both be valid ISO datetimes", 400)
        try:
            rooms = available_rooms(start_time=start_time, end_time=end_time)
        except ReservationError as e:
            return reservation_error_response(e)
    else:
        rooms = list_rooms()

    return JsonResponse({"rooms": [room_to_dict(room) for room in rooms]})


def _create_room(request):

    if not request.user.is_admin:
        return error_response("Admin role required", 403)

    data = _load_json(request)
    if data is None:
        return error_response("Invalid JSON", 400)

    required_fields = {"name", "capacity"}
    if not required_fields.issubset(data):
        return error_response("Missing required fields", 400)

    try:
        room = create_room(
            name=data["name"],
            capacity=data["capacity"],
            size=data.get("size", ""),
            tvs=data.get("tvs", 0),
            projectors=data.get("projectors", 0),
        )
    except ReservationError as e:
        return reservation_error_response(e)

    return JsonResponse(room_to_dict(room), status=201)


@csrf_exempt
@require_http_methods(["GET", "PATCH", "DELETE"])
def room_detail_view(request, room_id):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    if request.method != "GET" and not request.user.is_admin:
        return error_response("Admin role required", 403)

    try:
        if request.method == "GET":
            room = get_room(room_id)

        elif request.method == "PATCH":
            data = _load_json(request)
            if data is None:
                return error_response("Invalid JSON", 400)
            changes = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
            room = update_room(room_id, **changes)

        else:
            room = deactivate_room(room_id)

    except ReservationError as e:
        return reservation_error_response(e)

    return JsonResponse(room_to_dict(room))
