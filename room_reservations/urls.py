from django.urls import include, path

urlpatterns = [
    path("api/", include("reservations.api.urls")),
    path("api/", include("rooms.api.urls")),
    path("api/", include("accounts.api.urls")),
]
