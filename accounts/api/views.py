import json
import logging

from django.contrib.auth import authenticate, login, logout
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from accounts.services import approve_user, list_users, promote_to_premium
from reservations.api.errors import error_response, reservation_error_response
from reservations.exceptions import ReservationError
from reservations.services.queries import parse_bool

logger = logging.getLogger(__name__)


def account_to_dict(user):
    return {
        "id": user.id,
        "username": user.username,
        "name": user.get_full_name(),
        "email": user.email,
        "role": user.role,
        "approved": user.approved,
        "date_joined": user.date_joined.isoformat(),
    }


@csrf_exempt
@require_POST
def login_view(request):

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError:
        return error_response("Invalid JSON", 400)

    if not isinstance(data, dict) or not {"username", "password"}.issubset(data):
        return error_response("Missing required fields", 400)

    # unapproved clients are refused by ApprovedUserBackend
    user = authenticate(request, username=data["username"], password=data["password"])
    if user is None:
        logger.warning("Login refused for %s", data["username"])
        return error_response("Invalid credentials or account not approved", 401)

    login(request, user)
    return JsonResponse(account_to_dict(user))


@csrf_exempt
@require_POST
def logout_view(request):
    logout(request)
    return JsonResponse({"detail": "Logged out"})


@require_GET
def users_view(request):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    if not request.user.is_admin:
        return error_response("Admin role required", 403)

    approved = None
    if request.GET.get("approved") not in (None, ""):
        approved = parse_bool(request.GET["approved"])

    return JsonResponse({"users": [account_to_dict(u) for u in list_users(approved=approved)]})


def _admin_user_action(request, action, user_id):

    if not request.user.is_authenticated:
        return error_response("Authentication required", 401)

    if not request.user.is_admin:
        return error_response("Admin role required", 403)

    try:
        user = action(user_id)
    except ReservationError as e:
        return reservation_error_response(e)

    return JsonResponse(account_to_dict(user))


@csrf_exempt
@require_http_methods(["PATCH"])
def approve_user_view(request, user_id):
    return _admin_user_action(request, approve_user, user_id)


@csrf_exempt
@require_http_methods(["PATCH"])
def promote_user_view(request, user_id):
    return _admin_user_action(request, promote_to_premium, user_id)
