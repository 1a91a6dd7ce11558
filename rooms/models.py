from django.core.validators import MinValueValidator
from django.db import models


class Room(models.Model):
    name = models.CharField(max_length=120)
    size = models.CharField(max_length=60, blank=True)
    tvs = models.PositiveIntegerField(default=0)
    projectors = models.PositiveIntegerField(default=0)
    capacity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    # soft delete: rooms stay in place so reservation history keeps its room
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name
