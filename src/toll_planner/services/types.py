from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from toll_planner.exceptions import InvalidInputError


class VehicleClass(str, Enum):
    CAR = "car"
    BIKE = "bike"
    TRUCK = "truck"

    @classmethod
    def parse(cls, value: VehicleClass | str) -> VehicleClass:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidInputError(f"Unknown vehicle class: {value!r}") from exc


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise InvalidInputError("Coordinates must be finite numbers")
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidInputError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidInputError(f"Longitude out of range: {self.longitude}")


@dataclass(slots=True, frozen=True)
class GeocodeResult:
    point: GeoPoint
    display_name: str
    country_code: str


@dataclass(slots=True, frozen=True)
class Route:
    points: tuple[GeoPoint, ...]
    distance_km: float
    duration_min: float

    def to_geojson(self) -> dict:
        return {
            "type": "LineString",
            "coordinates": [[point.longitude, point.latitude] for point in self.points],
        }


@dataclass(slots=True, frozen=True)
class TollGate:
    gate_id: int | str
    name: str
    location: GeoPoint
    cost: Mapping[VehicleClass, float] = field(default_factory=dict)
    gate_type: str = "Highway"

    def cost_for(self, vehicle_class: VehicleClass) -> float:
        return float(self.cost.get(vehicle_class) or 0.0)


@dataclass(slots=True, frozen=True)
class TollCatalogSnapshot:
    gates: tuple[TollGate, ...] = ()

    def __iter__(self):
        return iter(self.gates)

    def __len__(self) -> int:
        return len(self.gates)


@dataclass(slots=True, frozen=True)
class MatchConfig:
    radius_meters: float = 250.0
    stride: int = 5


@dataclass(slots=True, frozen=True)
class FuelParams:
    economy_km_per_unit: float = 15.0
    price_per_unit: float = 105.0
    precision: int = 0


@dataclass(slots=True, frozen=True)
class RouteCostResult:
    route: Route
    toll_cost: float
    fuel_cost: float
    crossed_gates: tuple[TollGate, ...] = ()

    @property
    def total_cost(self) -> float:
        return self.toll_cost + self.fuel_cost


@dataclass(slots=True, frozen=True)
class ComparisonResult:
    standard: RouteCostResult
    alternate: RouteCostResult | None = None
    savings: float | None = None
    extra_time_min: float | None = None
