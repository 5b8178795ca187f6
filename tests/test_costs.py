from __future__ import annotations

import pytest

from toll_planner.exceptions import InvalidInputError
from toll_planner.services.costs import aggregate_route_cost, estimate_fuel_cost
from toll_planner.services.types import FuelParams, GeoPoint, Route, TollGate, VehicleClass


def _route(distance_km: float, duration_min: float = 60.0) -> Route:
    return Route(
        points=(
            GeoPoint(latitude=12.97, longitude=77.59),
            GeoPoint(latitude=12.30, longitude=76.64),
        ),
        distance_km=distance_km,
        duration_min=duration_min,
    )


def _gate(gate_id: int, **cost: float) -> TollGate:
    return TollGate(
        gate_id=gate_id,
        name=f"Gate {gate_id}",
        location=GeoPoint(latitude=12.9, longitude=77.4),
        cost={VehicleClass(vehicle): amount for vehicle, amount in cost.items()},
    )


def test_car_pays_toll_and_fuel() -> None:
    result = aggregate_route_cost(_route(50.0), [_gate(1, car=50, bike=0)], "car", FuelParams())

    assert result.toll_cost == 50
    assert result.fuel_cost == 350
    assert result.total_cost == 400


def test_bike_free_passage_leaves_only_fuel() -> None:
    result = aggregate_route_cost(
        _route(50.0), [_gate(1, car=50, bike=0)], VehicleClass.BIKE, FuelParams()
    )

    assert result.toll_cost == 0
    assert result.total_cost == result.fuel_cost == 350


def test_missing_vehicle_tariff_is_free() -> None:
    result = aggregate_route_cost(
        _route(15.0), [_gate(1, car=50, bike=0)], VehicleClass.TRUCK, FuelParams()
    )

    assert result.toll_cost == 0
    assert result.fuel_cost == 105


def test_gate_listed_twice_is_charged_once() -> None:
    gate = _gate(7, car=45, truck=90)

    result = aggregate_route_cost(_route(0.0), [gate, gate, _gate(8, car=30)], "car", FuelParams())

    assert result.toll_cost == 75
    assert [charged.gate_id for charged in result.crossed_gates] == [7, 8]


def test_fuel_params_are_configurable() -> None:
    params = FuelParams(economy_km_per_unit=40.0, price_per_unit=100.0, precision=2)

    assert estimate_fuel_cost(10.0, params) == pytest.approx(25.0)
    assert estimate_fuel_cost(1.0, FuelParams(precision=2)) == pytest.approx(7.0)


def test_fuel_cost_rounds_to_whole_units_by_default() -> None:
    assert estimate_fuel_cost(65.0, FuelParams()) == 455
    assert estimate_fuel_cost(1.0, FuelParams(economy_km_per_unit=3.0, price_per_unit=10.0)) == 3


def test_negative_distance_raises() -> None:
    with pytest.raises(InvalidInputError):
        aggregate_route_cost(_route(-1.0), [], "car", FuelParams())


def test_unknown_vehicle_class_raises() -> None:
    with pytest.raises(InvalidInputError):
        aggregate_route_cost(_route(10.0), [], "plane", FuelParams())


@pytest.mark.parametrize(
    "params",
    [FuelParams(economy_km_per_unit=0.0), FuelParams(price_per_unit=-1.0)],
)
def test_invalid_fuel_params_raise(params: FuelParams) -> None:
    with pytest.raises(InvalidInputError):
        estimate_fuel_cost(10.0, params)
