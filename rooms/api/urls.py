from django.urls import path
from .views import room_detail_view, rooms_view

urlpatterns = [
    path("rooms/", rooms_view),
    path("rooms/<int:room_id>/", room_detail_view),
]
