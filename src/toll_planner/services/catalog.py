from __future__ import annotations

from django.db import DatabaseError

from toll_planner.exceptions import CatalogUnavailableError
from toll_planner.models import TollGate as TollGateRecord
from toll_planner.services.types import GeoPoint, TollCatalogSnapshot, TollGate, VehicleClass


def load_toll_catalog() -> TollCatalogSnapshot:
    """Read every toll gate into an immutable snapshot for one estimation."""
    try:
        records = list(TollGateRecord.objects.all())
    except DatabaseError as exc:
        raise CatalogUnavailableError("Toll gate catalog could not be read") from exc

    return TollCatalogSnapshot(gates=tuple(to_toll_gate(record) for record in records))


def to_toll_gate(record: TollGateRecord) -> TollGate:
    tariffs = {
        VehicleClass.CAR: record.cost_car,
        VehicleClass.BIKE: record.cost_bike,
        VehicleClass.TRUCK: record.cost_truck,
    }
    return TollGate(
        gate_id=record.pk,
        name=record.name,
        location=GeoPoint(latitude=record.latitude, longitude=record.longitude),
        cost={
            vehicle_class: float(amount)
            for vehicle_class, amount in tariffs.items()
            if amount is not None
        },
        gate_type=record.gate_type,
    )
