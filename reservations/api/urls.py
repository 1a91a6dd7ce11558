from django.urls import path
from .views import (
    approve_reservation_view,
    available_slots_view,
    cancel_reservation_view,
    occupied_slots_view,
    reservation_detail_view,
    reservation_summary_view,
    reservations_view,
    room_agenda_view,
)

urlpatterns = [
    path("reservations/", reservations_view),
    path("reservations/summary/", reservation_summary_view),
    path("reservations/<int:reservation_id>/", reservation_detail_view),
    path("reservations/<int:reservation_id>/cancel/", cancel_reservation_view),
    path("reservations/<int:reservation_id>/approve/", approve_reservation_view),
    path("rooms/<int:room_id>/occupied-slots/", occupied_slots_view),
    path("rooms/<int:room_id>/available-slots/", available_slots_view),
    path("rooms/<int:room_id>/agenda/", room_agenda_view),
]
