from django.http import JsonResponse

from reservations.exceptions import (
    ReservationConflictError,
    ReservationNotFoundError,
    ReservationStateError,
    ReservationValidationError,
)

ERROR_STATUS_CODES = {
    ReservationValidationError: 400,
    ReservationStateError: 400,
    ReservationNotFoundError: 404,
    ReservationConflictError: 409,
}


def error_response(message, status_code):
    return JsonResponse({"error": message}, status=status_code)


def reservation_error_response(error):
    return error_response(error.message, ERROR_STATUS_CODES[type(error)])
