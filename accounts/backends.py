import logging

from django.contrib.auth.backends import ModelBackend

logger = logging.getLogger(__name__)


class ApprovedUserBackend(ModelBackend):
    """
    Username/password authentication that refuses accounts an admin
    has not approved yet.
    """

    def user_can_authenticate(self, user):
        if not super().user_can_authenticate(user):
            return False

        if user.is_admin or user.approved:
            return True

        logger.warning("Login refused for unapproved user %s", user.pk)
        return False
