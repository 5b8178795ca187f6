from __future__ import annotations

import pytest
from django.db import DatabaseError

from toll_planner.exceptions import CatalogUnavailableError
from toll_planner.models import TollGate as TollGateRecord
from toll_planner.services.catalog import load_toll_catalog
from toll_planner.services.types import VehicleClass


@pytest.mark.django_db
def test_catalog_snapshot_reflects_store() -> None:
    TollGateRecord.objects.create(
        name="Hattargi Toll Plaza",
        latitude=16.0827,
        longitude=74.5029,
        cost_car=40,
        cost_bike=0,
    )

    snapshot = load_toll_catalog()

    assert len(snapshot) == 1
    gate = next(iter(snapshot))
    assert gate.name == "Hattargi Toll Plaza"
    assert gate.location.latitude == pytest.approx(16.0827)
    assert gate.cost_for(VehicleClass.CAR) == 40.0
    assert VehicleClass.TRUCK not in gate.cost
    assert gate.cost_for(VehicleClass.TRUCK) == 0.0


@pytest.mark.django_db
def test_empty_store_gives_empty_snapshot() -> None:
    assert len(load_toll_catalog()) == 0


def test_database_error_raises_catalog_unavailable(mocker) -> None:
    mocker.patch(
        "toll_planner.services.catalog.TollGateRecord.objects.all",
        side_effect=DatabaseError("no such table"),
    )

    with pytest.raises(CatalogUnavailableError):
        load_toll_catalog()
