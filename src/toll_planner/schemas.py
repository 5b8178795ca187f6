from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Coordinate(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class TollEstimateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start_location: str | None = Field(default=None, min_length=3, max_length=300)
    finish_location: str | None = Field(default=None, min_length=3, max_length=300)
    start: Coordinate | None = None
    finish: Coordinate | None = None
    vehicle_class: Literal["car", "bike", "truck"] = "car"
    proximity_radius_meters: float | None = Field(default=None, gt=0.0, le=5000.0)
    sampling_stride: int | None = Field(default=None, ge=1, le=500)
    fuel_economy_km_per_unit: float | None = Field(default=None, gt=0.0, le=200.0)
    fuel_price_per_unit: float | None = Field(default=None, ge=0.0, le=10000.0)

    @model_validator(mode="after")
    def _require_endpoints(self) -> TollEstimateRequest:
        if self.start is None and not self.start_location:
            raise ValueError("Either start or start_location is required")
        if self.finish is None and not self.finish_location:
            raise ValueError("Either finish or finish_location is required")
        return self


class TollGateResponse(BaseModel):
    id: int
    name: str
    location: dict[str, float]
    cost: dict[str, float | None]
    type: str


class RouteCostResponse(BaseModel):
    distance_km: float
    duration_minutes: float
    toll_cost: float
    fuel_cost: float
    total_cost: float
    toll_gates: list[str]
    route_geojson: dict


class TollEstimateResponse(BaseModel):
    start: Coordinate
    finish: Coordinate
    start_name: str | None = None
    finish_name: str | None = None
    vehicle_class: Literal["car", "bike", "truck"]
    standard: RouteCostResponse
    alternate: RouteCostResponse | None = None
    savings: float | None = None
    extra_time_minutes: float | None = None
    alternate_considered: bool
    assumptions: dict[str, int | float]
    warnings: list[str] = Field(default_factory=list)


class PlaceResponse(BaseModel):
    name: str
    location: Coordinate
