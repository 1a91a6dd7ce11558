from django.contrib.auth import get_user_model

from reservations.models import Reservation

User = get_user_model()

# Roles missing from this table go through admin review
INITIAL_STATUS_BY_ROLE = {
    User.Role.CLIENT_PREMIUM: Reservation.Status.APPROVED,
}


def initial_status_for(user):
    return INITIAL_STATUS_BY_ROLE.get(user.role, Reservation.Status.PENDING)


def can_see_all_reservations(user):
    return user.is_admin
