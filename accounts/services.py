import logging

from django.contrib.auth import get_user_model

from reservations.exceptions import ReservationNotFoundError

logger = logging.getLogger(__name__)


def _get_user(user_id):
    User = get_user_model()
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise ReservationNotFoundError("user not found")
    return user


def list_users(approved=None):
    User = get_user_model()
    users = User.objects.order_by("-date_joined", "-id")
    if approved is not None:
        users = users.filter(approved=approved)
    return list(users)


def approve_user(user_id):
    user = _get_user(user_id)
    user.approved = True
    user.save(update_fields=["approved"])
    logger.info("User %s approved", user.pk)
    return user


def promote_to_premium(user_id):
    """
    Moves a client to the premium tier, whose reservations skip admin review.
    Admin accounts keep their role.
    """
    user = _get_user(user_id)
    if user.role == user.Role.CLIENT:
        user.role = user.Role.CLIENT_PREMIUM
        user.save(update_fields=["role"])
        logger.info("User %s promoted to premium", user.pk)
    return user
