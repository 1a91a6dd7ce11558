from django.urls import path
from .views import (
    approve_user_view,
    login_view,
    logout_view,
    promote_user_view,
    users_view,
)

urlpatterns = [
    path("auth/login/", login_view),
    path("auth/logout/", logout_view),
    path("users/", users_view),
    path("users/<int:user_id>/approve/", approve_user_view),
    path("users/<int:user_id>/promote-premium/", promote_user_view),
]
