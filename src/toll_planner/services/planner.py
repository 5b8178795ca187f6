from __future__ import annotations

import logging
from collections.abc import Callable

from django.conf import settings

from toll_planner.exceptions import CatalogUnavailableError, UpstreamUnavailableError
from toll_planner.schemas import (
    Coordinate,
    RouteCostResponse,
    TollEstimateRequest,
    TollEstimateResponse,
)
from toll_planner.services.catalog import load_toll_catalog
from toll_planner.services.estimation import estimate
from toll_planner.services.geocoding import GeocodingClient
from toll_planner.services.osrm import OsrmClient
from toll_planner.services.types import (
    FuelParams,
    GeoPoint,
    MatchConfig,
    Route,
    RouteCostResult,
    TollCatalogSnapshot,
    VehicleClass,
)

logger = logging.getLogger(__name__)


def match_config_from_settings(
    radius_meters: float | None = None, stride: int | None = None
) -> MatchConfig:
    return MatchConfig(
        radius_meters=radius_meters or float(settings.TOLL_PROXIMITY_RADIUS_METERS),
        stride=stride or int(settings.TOLL_SAMPLING_STRIDE),
    )


def fuel_params_from_settings(
    vehicle_class: VehicleClass,
    economy_km_per_unit: float | None = None,
    price_per_unit: float | None = None,
) -> FuelParams:
    defaults = settings.FUEL_PARAMS_BY_VEHICLE_CLASS.get(vehicle_class.value, {})
    return FuelParams(
        economy_km_per_unit=economy_km_per_unit
        or float(defaults.get("economy_km_per_unit", settings.FUEL_ECONOMY_KM_PER_UNIT)),
        price_per_unit=(
            price_per_unit
            if price_per_unit is not None
            else float(defaults.get("price_per_unit", settings.FUEL_PRICE_PER_UNIT))
        ),
        precision=int(settings.FUEL_COST_PRECISION),
    )


def alternate_enabled_for(vehicle_class: VehicleClass) -> bool:
    return vehicle_class.value in settings.TOLL_EXCLUSION_VEHICLE_CLASSES


class TollPlannerService:
    def __init__(
        self,
        geocoding_client: GeocodingClient | None = None,
        osrm_client: OsrmClient | None = None,
        catalog_loader: Callable[[], TollCatalogSnapshot] | None = None,
    ) -> None:
        self.geocoding_client = geocoding_client or GeocodingClient()
        self.osrm_client = osrm_client or OsrmClient()
        self.catalog_loader = catalog_loader or load_toll_catalog

    def estimate(self, request: TollEstimateRequest) -> TollEstimateResponse:
        vehicle_class = VehicleClass.parse(request.vehicle_class)
        match_config = match_config_from_settings(
            request.proximity_radius_meters, request.sampling_stride
        )
        fuel_params = fuel_params_from_settings(
            vehicle_class, request.fuel_economy_km_per_unit, request.fuel_price_per_unit
        )
        warnings: list[str] = []

        start, start_name = self._resolve_point(request.start, request.start_location)
        finish, finish_name = self._resolve_point(request.finish, request.finish_location)

        # Standard route errors propagate; alternate and catalog errors degrade.
        standard_route = self.osrm_client.route(start, finish)

        alternate_considered = alternate_enabled_for(vehicle_class)
        alternate_route: Route | None = None
        if alternate_considered:
            try:
                alternate_route = self.osrm_client.route(start, finish, exclude_tolls=True)
            except UpstreamUnavailableError as exc:
                logger.warning("Toll-free alternate route unavailable: %s", exc)
                warnings.append("Toll-free alternate route unavailable")

        try:
            catalog = self.catalog_loader()
        except CatalogUnavailableError as exc:
            logger.warning("Estimating without toll gates: %s", exc)
            warnings.append("Toll gate catalog unavailable; toll costs assumed to be zero")
            catalog = TollCatalogSnapshot()

        comparison = estimate(
            standard_route=standard_route,
            alternate_route=alternate_route,
            catalog=catalog,
            vehicle_class=vehicle_class,
            match_config=match_config,
            fuel_params=fuel_params,
        )

        return TollEstimateResponse(
            start=_coordinate(start),
            finish=_coordinate(finish),
            start_name=start_name,
            finish_name=finish_name,
            vehicle_class=vehicle_class.value,
            standard=_route_cost_response(comparison.standard),
            alternate=(
                _route_cost_response(comparison.alternate)
                if comparison.alternate is not None
                else None
            ),
            savings=round(comparison.savings, 2) if comparison.savings is not None else None,
            extra_time_minutes=(
                round(comparison.extra_time_min, 2)
                if comparison.extra_time_min is not None
                else None
            ),
            alternate_considered=alternate_considered,
            assumptions={
                "proximity_radius_meters": match_config.radius_meters,
                "sampling_stride": match_config.stride,
                "fuel_economy_km_per_unit": fuel_params.economy_km_per_unit,
                "fuel_price_per_unit": fuel_params.price_per_unit,
                "toll_gates_in_catalog": len(catalog),
            },
            warnings=warnings,
        )

    def _resolve_point(
        self, coordinate: Coordinate | None, location: str | None
    ) -> tuple[GeoPoint, str | None]:
        if coordinate is not None:
            point = GeoPoint(latitude=coordinate.latitude, longitude=coordinate.longitude)
            return point, location
        result = self.geocoding_client.geocode(location or "")
        return result.point, result.display_name or location


def _coordinate(point: GeoPoint) -> Coordinate:
    return Coordinate(latitude=round(point.latitude, 6), longitude=round(point.longitude, 6))


def _route_cost_response(result: RouteCostResult) -> RouteCostResponse:
    return RouteCostResponse(
        distance_km=round(result.route.distance_km, 3),
        duration_minutes=round(result.route.duration_min, 2),
        toll_cost=round(result.toll_cost, 2),
        fuel_cost=round(result.fuel_cost, 2),
        total_cost=round(result.total_cost, 2),
        toll_gates=[gate.name for gate in result.crossed_gates],
        route_geojson=result.route.to_geojson(),
    )
