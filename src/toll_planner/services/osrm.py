from __future__ import annotations

import hashlib
import logging
import math
import time
from typing import Any

import httpx
from django.conf import settings
from django.core.cache import cache

from toll_planner.exceptions import (
    InvalidInputError,
    NoRouteFoundError,
    UpstreamUnavailableError,
)
from toll_planner.services.geo import METERS_PER_KM, SECONDS_PER_MINUTE
from toll_planner.services.types import GeoPoint, Route

logger = logging.getLogger(__name__)


class OsrmClient:
    def __init__(self) -> None:
        self.base_url = settings.OSRM_BASE_URL.rstrip("/")
        self.profile = settings.OSRM_PROFILE
        self.timeout = settings.OSRM_TIMEOUT_SECONDS
        self.retry_count = settings.OSRM_RETRY_COUNT

    def route(self, start: GeoPoint, finish: GeoPoint, *, exclude_tolls: bool = False) -> Route:
        cache_key = self._cache_key(start, finish, exclude_tolls)
        cached = cache.get(cache_key)
        if cached:
            return Route(
                points=tuple(
                    GeoPoint(latitude=lat, longitude=lon) for lat, lon in cached["points"]
                ),
                distance_km=cached["distance_km"],
                duration_min=cached["duration_min"],
            )

        coordinates = ";".join(
            f"{point.longitude:.6f},{point.latitude:.6f}" for point in (start, finish)
        )
        endpoint = f"{self.base_url}/route/v1/{self.profile}/{coordinates}"
        params = {
            "overview": "full",
            "geometries": "geojson",
            "steps": "false",
            "annotations": "false",
        }
        if exclude_tolls:
            params["exclude"] = "toll"

        for attempt in range(self.retry_count + 1):
            try:
                response = httpx.get(endpoint, params=params, timeout=self.timeout)
                response.raise_for_status()
                payload = response.json()
                route = self._parse_response(payload)
                cache.set(
                    cache_key,
                    {
                        "points": [(point.latitude, point.longitude) for point in route.points],
                        "distance_km": route.distance_km,
                        "duration_min": route.duration_min,
                    },
                    timeout=settings.ROUTE_CACHE_TTL_SECONDS,
                )
                return route
            except NoRouteFoundError:
                raise
            # A non-JSON body (e.g. a rate-limit page) surfaces as ValueError
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning(
                    "OSRM request failed (attempt %d/%d, exclude_tolls=%s): %s",
                    attempt + 1,
                    self.retry_count + 1,
                    exclude_tolls,
                    exc,
                )
                if attempt >= self.retry_count:
                    raise UpstreamUnavailableError("OSRM request failed") from exc
                time.sleep(0.3 * (attempt + 1))

        raise UpstreamUnavailableError("OSRM request failed")

    def _cache_key(self, start: GeoPoint, finish: GeoPoint, exclude_tolls: bool) -> str:
        encoded = "|".join(
            [
                self.profile,
                f"{start.latitude:.5f}:{start.longitude:.5f}",
                f"{finish.latitude:.5f}:{finish.longitude:.5f}",
                "notoll" if exclude_tolls else "any",
            ]
        ).encode()
        digest = hashlib.sha256(encoded).hexdigest()
        return f"route:{digest}"

    @staticmethod
    def _parse_response(payload: Any) -> Route:
        if not isinstance(payload, dict) or payload.get("code") != "Ok":
            raise NoRouteFoundError("Could not compute route")

        routes = payload.get("routes") or []
        if not routes:
            raise NoRouteFoundError("Could not compute route")

        first = routes[0]
        if not isinstance(first, dict):
            raise NoRouteFoundError("Could not compute route")

        geometry = first.get("geometry") or {}
        raw_coordinates = geometry.get("coordinates") if isinstance(geometry, dict) else None
        if not isinstance(raw_coordinates, list) or len(raw_coordinates) < 2:
            raise NoRouteFoundError("Route geometry unavailable")

        # OSRM returns [longitude, latitude] pairs
        try:
            points = tuple(
                GeoPoint(latitude=float(lat), longitude=float(lon))
                for lon, lat, *_ in raw_coordinates
            )
        except (TypeError, ValueError, InvalidInputError) as exc:
            raise NoRouteFoundError("Route geometry is malformed") from exc

        try:
            distance_meters = float(first["distance"])
            duration_seconds = float(first["duration"])
        except (KeyError, TypeError, ValueError) as exc:
            raise NoRouteFoundError("Route distance or duration missing") from exc
        if not (
            math.isfinite(distance_meters)
            and math.isfinite(duration_seconds)
            and distance_meters >= 0
            and duration_seconds >= 0
        ):
            raise NoRouteFoundError("Route distance or duration is invalid")

        return Route(
            points=points,
            distance_km=distance_meters / METERS_PER_KM,
            duration_min=duration_seconds / SECONDS_PER_MINUTE,
        )
