from __future__ import annotations

from collections.abc import Iterable

from toll_planner.exceptions import InvalidInputError
from toll_planner.services.types import (
    FuelParams,
    Route,
    RouteCostResult,
    TollGate,
    VehicleClass,
)


def estimate_fuel_cost(distance_km: float, fuel_params: FuelParams) -> float:
    if distance_km < 0:
        raise InvalidInputError("Route distance must be >= 0")
    if fuel_params.economy_km_per_unit <= 0:
        raise InvalidInputError("Fuel economy must be > 0")
    if fuel_params.price_per_unit < 0:
        raise InvalidInputError("Fuel price must be >= 0")

    raw_cost = distance_km / fuel_params.economy_km_per_unit * fuel_params.price_per_unit
    return float(round(raw_cost, fuel_params.precision))


def aggregate_route_cost(
    route: Route,
    matched_gates: Iterable[TollGate],
    vehicle_class: VehicleClass | str,
    fuel_params: FuelParams,
) -> RouteCostResult:
    vehicle = VehicleClass.parse(vehicle_class)
    fuel_cost = estimate_fuel_cost(route.distance_km, fuel_params)

    # A gate is charged once per route even if the caller passes it twice.
    charged: dict[int | str, TollGate] = {}
    for gate in matched_gates:
        charged.setdefault(gate.gate_id, gate)

    toll_cost = sum(gate.cost_for(vehicle) for gate in charged.values())
    return RouteCostResult(
        route=route,
        toll_cost=float(toll_cost),
        fuel_cost=fuel_cost,
        crossed_gates=tuple(charged.values()),
    )
