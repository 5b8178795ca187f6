"""Decide which toll gates a route passes through.

Only every ``stride``-th point of the route geometry is compared against a
gate, plus the final point. Road geometries from the routing provider are
dense enough that this rarely matters, but a gate lying entirely between two
sampled points is reported as not crossed. Sampling can only cause such false
negatives: a gate is never matched unless a real route point lies inside the
proximity radius.
"""

from __future__ import annotations

import logging

from toll_planner.exceptions import InvalidInputError
from toll_planner.services.geo import haversine_meters
from toll_planner.services.types import MatchConfig, Route, TollCatalogSnapshot, TollGate

logger = logging.getLogger(__name__)


def sample_indices(point_count: int, stride: int) -> list[int]:
    if stride < 1:
        raise InvalidInputError("Sampling stride must be at least 1")
    if point_count <= 0:
        return []
    if point_count < stride:
        return list(range(point_count))

    indices = list(range(0, point_count, stride))
    if indices[-1] != point_count - 1:
        indices.append(point_count - 1)
    return indices


def route_crosses_gate(route: Route, gate: TollGate, radius_meters: float, stride: int) -> bool:
    if radius_meters < 0:
        raise InvalidInputError("Proximity radius must be >= 0")

    points = route.points
    return any(
        haversine_meters(points[index], gate.location) < radius_meters
        for index in sample_indices(len(points), stride)
    )


def crossed_gates(
    route: Route,
    catalog: TollCatalogSnapshot | None,
    config: MatchConfig,
) -> list[TollGate]:
    if not catalog:
        return []

    matched: list[TollGate] = []
    seen_ids: set[int | str] = set()
    for gate in catalog:
        if gate.gate_id in seen_ids:
            continue
        if route_crosses_gate(route, gate, config.radius_meters, config.stride):
            seen_ids.add(gate.gate_id)
            matched.append(gate)

    logger.debug(
        "Route of %d points crosses %d/%d toll gates",
        len(route.points),
        len(matched),
        len(catalog),
    )
    return matched
