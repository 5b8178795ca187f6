"""Place-name lookup against Nominatim, scoped to the toll catalog's region."""

from __future__ import annotations

import hashlib
import time
from typing import Any

import httpx
from django.conf import settings
from django.core.cache import cache

from toll_planner.exceptions import (
    InvalidInputError,
    InvalidLocationError,
    UpstreamUnavailableError,
)
from toll_planner.services.types import GeocodeResult, GeoPoint


class GeocodingClient:
    def __init__(self) -> None:
        self.base_url = settings.GEOCODING_BASE_URL.rstrip("/")
        self.timeout = settings.GEOCODING_TIMEOUT_SECONDS
        self.retry_count = settings.GEOCODING_RETRY_COUNT
        self.user_agent = settings.GEOCODING_USER_AGENT
        self.country_code = settings.GEOCODING_COUNTRY_CODE.lower()
        self.region = settings.GEOCODING_REGION.strip()
        self.viewbox = settings.GEOCODING_VIEWBOX

    def geocode(self, query: str) -> GeocodeResult:
        matches = self.search(query, limit=1)
        if not matches:
            raise InvalidLocationError(f"Location could not be resolved: {query}")
        return matches[0]

    def search(self, query: str, *, limit: int = 5) -> list[GeocodeResult]:
        scoped_query = self.scoped_query(query)
        cache_key = self._cache_key(scoped_query, limit)
        cached = cache.get(cache_key)
        if cached is not None:
            return [
                GeocodeResult(
                    point=GeoPoint(latitude=row["latitude"], longitude=row["longitude"]),
                    display_name=row["display_name"],
                    country_code=row["country_code"],
                )
                for row in cached
            ]

        payload = self._fetch(scoped_query, limit)
        results = self._parse_results(payload)
        cache.set(
            cache_key,
            [
                {
                    "latitude": result.point.latitude,
                    "longitude": result.point.longitude,
                    "display_name": result.display_name,
                    "country_code": result.country_code,
                }
                for result in results
            ],
            timeout=settings.GEOCODE_CACHE_TTL_SECONDS,
        )
        return results

    def scoped_query(self, query: str) -> str:
        query = query.strip()
        if not query:
            raise InvalidLocationError("Location must not be empty")
        if not self.region:
            return query

        # "Hubli" -> "Hubli, Karnataka, India"; already scoped queries pass through
        leading_region = self.region.split(",")[0].strip().lower()
        if leading_region and leading_region in query.lower():
            return query
        return f"{query}, {self.region}"

    def _fetch(self, scoped_query: str, limit: int) -> Any:
        params: dict[str, Any] = {
            "q": scoped_query,
            "format": "jsonv2",
            "limit": limit,
            "addressdetails": 1,
        }
        if self.country_code:
            params["countrycodes"] = self.country_code
        if self.viewbox:
            params["viewbox"] = self.viewbox

        for attempt in range(self.retry_count + 1):
            try:
                response = httpx.get(
                    f"{self.base_url}/search",
                    params=params,
                    timeout=self.timeout,
                    headers={
                        "Accept": "application/json",
                        "Accept-Language": "en",
                        "User-Agent": self.user_agent,
                    },
                )
                response.raise_for_status()
                return response.json()
            except (httpx.HTTPError, ValueError) as exc:
                if attempt >= self.retry_count:
                    raise UpstreamUnavailableError("Geocoding request failed") from exc
                time.sleep(0.3 * (attempt + 1))

        raise UpstreamUnavailableError("Geocoding request failed")

    def _parse_results(self, payload: Any) -> list[GeocodeResult]:
        if not isinstance(payload, list):
            raise UpstreamUnavailableError("Unexpected geocoding response")

        results: list[GeocodeResult] = []
        for row in payload:
            if not isinstance(row, dict):
                continue
            try:
                point = GeoPoint(latitude=float(row["lat"]), longitude=float(row["lon"]))
            except (KeyError, TypeError, ValueError, InvalidInputError):
                continue

            address = row.get("address") or {}
            country_code = str(address.get("country_code", "")).lower()
            if self.country_code and country_code and country_code != self.country_code:
                continue

            results.append(
                GeocodeResult(
                    point=point,
                    display_name=str(row.get("display_name") or row.get("name") or ""),
                    country_code=country_code,
                )
            )
        return results

    @staticmethod
    def _cache_key(scoped_query: str, limit: int) -> str:
        digest = hashlib.sha256(f"{scoped_query.lower()}|{limit}".encode()).hexdigest()
        return f"geocode:{digest}"
