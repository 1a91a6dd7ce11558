from datetime import datetime

from django.contrib.auth import get_user_model
from django.utils import timezone

from reservations.models import Reservation
from rooms.models import Room

User = get_user_model()


def local_dt(*args):
    return timezone.make_aware(datetime(*args))


def make_user(username, role=User.Role.CLIENT, approved=True):
    return User.objects.create_user(
        username=username,
        password="1234",
        role=role,
        approved=approved,
    )


def make_room(name="Alpha", capacity=4, **kwargs):
    return Room.objects.create(name=name, capacity=capacity, **kwargs)


def make_reservation(user, room, start_time, end_time, status=Reservation.Status.PENDING):
    return Reservation.objects.create(
        user=user,
        room=room,
        start_time=start_time,
        end_time=end_time,
        expected_duration=int((end_time - start_time).total_seconds() // 60),
        status=status,
    )
