from __future__ import annotations

import math

from toll_planner.services.types import GeoPoint

EARTH_RADIUS_METERS = 6_371_000.0
METERS_PER_KM = 1000.0
SECONDS_PER_MINUTE = 60.0


def haversine_meters(start: GeoPoint, end: GeoPoint) -> float:
    lat1_rad = math.radians(start.latitude)
    lon1_rad = math.radians(start.longitude)
    lat2_rad = math.radians(end.latitude)
    lon2_rad = math.radians(end.longitude)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2.0) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c
