from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models


class TollGate(models.Model):
    class GateType(models.TextChoices):
        EXPRESSWAY = "Expressway"
        HIGHWAY = "Highway"
        BRIDGE = "Bridge"

    objects = models.Manager["TollGate"]()

    name = models.CharField(max_length=255, unique=True)
    latitude = models.FloatField()
    longitude = models.FloatField()

    # Per vehicle class tariff, null means free passage
    cost_car = models.DecimalField(
        max_digits=8, decimal_places=2, validators=[MinValueValidator(0)]
    )
    cost_bike = models.DecimalField(
        max_digits=8, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    cost_truck = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )

    gate_type = models.CharField(
        max_length=20, choices=GateType.choices, default=GateType.HIGHWAY
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("name",)
        indexes = (models.Index(fields=["latitude", "longitude"], name="toll_gate_location_idx"),)

    def __str__(self) -> str:
        return f"{self.name} ({self.gate_type})"
