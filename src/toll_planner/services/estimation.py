from __future__ import annotations

import logging

from toll_planner.exceptions import InvalidInputError
from toll_planner.services.comparison import compare_routes
from toll_planner.services.costs import aggregate_route_cost
from toll_planner.services.matching import crossed_gates
from toll_planner.services.types import (
    ComparisonResult,
    FuelParams,
    MatchConfig,
    Route,
    RouteCostResult,
    TollCatalogSnapshot,
    VehicleClass,
)

logger = logging.getLogger(__name__)


def estimate(
    standard_route: Route | None,
    alternate_route: Route | None,
    catalog: TollCatalogSnapshot | None,
    vehicle_class: VehicleClass | str,
    match_config: MatchConfig | None = None,
    fuel_params: FuelParams | None = None,
) -> ComparisonResult:
    if standard_route is None:
        raise InvalidInputError("A standard route is required")

    vehicle = VehicleClass.parse(vehicle_class)
    match_config = match_config or MatchConfig()
    fuel_params = fuel_params or FuelParams()

    standard = _cost_route(standard_route, catalog, vehicle, match_config, fuel_params)
    alternate = (
        _cost_route(alternate_route, catalog, vehicle, match_config, fuel_params)
        if alternate_route is not None
        else None
    )

    result = compare_routes(standard, alternate)
    logger.info(
        "Estimated %s route: standard total %.2f, alternate %s",
        vehicle.value,
        standard.total_cost,
        "surfaced" if result.alternate is not None else "not surfaced",
    )
    return result


def _cost_route(
    route: Route,
    catalog: TollCatalogSnapshot | None,
    vehicle: VehicleClass,
    match_config: MatchConfig,
    fuel_params: FuelParams,
) -> RouteCostResult:
    if len(route.points) < 2:
        raise InvalidInputError("A route needs at least two points")
    if route.duration_min < 0:
        raise InvalidInputError("Route duration must be >= 0")

    gates = crossed_gates(route, catalog, match_config)
    return aggregate_route_cost(route, gates, vehicle, fuel_params)
