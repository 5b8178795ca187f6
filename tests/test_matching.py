from __future__ import annotations

import pytest

from toll_planner.exceptions import InvalidInputError
from toll_planner.services.geo import haversine_meters
from toll_planner.services.matching import crossed_gates, route_crosses_gate, sample_indices
from toll_planner.services.types import (
    GeoPoint,
    MatchConfig,
    Route,
    TollCatalogSnapshot,
    TollGate,
    VehicleClass,
)

LATITUDE = 12.9
START_LONGITUDE = 77.0
# 0.0009 degrees of latitude is roughly 100 m
NORTH_100_METERS = 0.0009


def _route(point_count: int, spacing_deg: float = 0.001) -> Route:
    points = tuple(
        GeoPoint(latitude=LATITUDE, longitude=START_LONGITUDE + index * spacing_deg)
        for index in range(point_count)
    )
    return Route(points=points, distance_km=1.0, duration_min=1.0)


def _gate_near(route: Route, index: int, gate_id: int = 1) -> TollGate:
    anchor = route.points[index]
    return TollGate(
        gate_id=gate_id,
        name=f"Gate {gate_id}",
        location=GeoPoint(
            latitude=anchor.latitude + NORTH_100_METERS, longitude=anchor.longitude
        ),
        cost={VehicleClass.CAR: 50.0, VehicleClass.BIKE: 0.0},
    )


@pytest.mark.parametrize(
    ("point_count", "stride", "expected"),
    [
        (12, 5, [0, 5, 10, 11]),
        (11, 5, [0, 5, 10]),
        (10, 5, [0, 5, 9]),
        (3, 5, [0, 1, 2]),
        (4, 1, [0, 1, 2, 3]),
        (0, 5, []),
    ],
)
def test_sample_indices_cover_first_and_last_point(
    point_count: int, stride: int, expected: list[int]
) -> None:
    assert sample_indices(point_count, stride) == expected


def test_sample_indices_rejects_zero_stride() -> None:
    with pytest.raises(InvalidInputError):
        sample_indices(10, 0)


@pytest.mark.parametrize("stride", range(1, 15))
def test_gate_far_from_every_point_never_matches(stride: int) -> None:
    route = _route(40)
    far_gate = TollGate(
        gate_id=9,
        name="Far away",
        location=GeoPoint(latitude=13.0, longitude=77.02),
        cost={VehicleClass.CAR: 80.0},
    )

    assert not route_crosses_gate(route, far_gate, radius_meters=250.0, stride=stride)


@pytest.mark.parametrize("stride", range(1, 15))
def test_gate_near_sampled_point_matches_for_any_stride(stride: int) -> None:
    route = _route(40)
    gate = _gate_near(route, 0)

    assert route_crosses_gate(route, gate, radius_meters=250.0, stride=stride)


def test_last_point_is_always_sampled() -> None:
    route = _route(12, spacing_deg=0.01)
    gate = _gate_near(route, 11)

    assert route_crosses_gate(route, gate, radius_meters=250.0, stride=5)


def test_short_route_checks_every_point() -> None:
    route = _route(3, spacing_deg=0.01)
    gate = _gate_near(route, 1)

    assert route_crosses_gate(route, gate, radius_meters=250.0, stride=10)


def test_gate_between_sampled_points_is_missed_by_stride() -> None:
    # Points are ~1 km apart so only index 2 lies inside the radius.
    route = _route(10, spacing_deg=0.01)
    gate = _gate_near(route, 2)

    assert not route_crosses_gate(route, gate, radius_meters=250.0, stride=5)
    assert route_crosses_gate(route, gate, radius_meters=250.0, stride=1)


def test_radius_is_configurable() -> None:
    route = _route(10, spacing_deg=0.01)
    gate = _gate_near(route, 0)

    assert not route_crosses_gate(route, gate, radius_meters=50.0, stride=5)
    assert route_crosses_gate(route, gate, radius_meters=500.0, stride=5)


def test_gate_exactly_at_radius_does_not_match() -> None:
    route = _route(1)
    gate = _gate_near(route, 0)
    radius = haversine_meters(route.points[0], gate.location)

    assert not route_crosses_gate(route, gate, radius_meters=radius, stride=5)
    assert route_crosses_gate(route, gate, radius_meters=radius + 1e-6, stride=5)


def test_zero_radius_matches_nothing() -> None:
    route = _route(3)
    on_route = TollGate(
        gate_id=1,
        name="On Route",
        location=route.points[0],
        cost={VehicleClass.CAR: 50.0},
    )

    assert not route_crosses_gate(route, on_route, radius_meters=0.0, stride=1)


def test_negative_radius_raises() -> None:
    route = _route(5)
    with pytest.raises(InvalidInputError):
        route_crosses_gate(route, _gate_near(route, 0), radius_meters=-1.0, stride=5)


def test_matching_is_repeatable() -> None:
    route = _route(25, spacing_deg=0.01)
    gate = _gate_near(route, 3)

    first = route_crosses_gate(route, gate, radius_meters=250.0, stride=3)
    second = route_crosses_gate(route, gate, radius_meters=250.0, stride=3)

    assert first is second


def test_looping_route_reports_gate_once() -> None:
    outbound = _route(11).points
    loop = Route(points=outbound + tuple(reversed(outbound)), distance_km=2.2, duration_min=4.0)
    gate = _gate_near(loop, 5)

    matched = crossed_gates(loop, TollCatalogSnapshot(gates=(gate,)), MatchConfig(stride=1))

    assert [match.gate_id for match in matched] == [1]


def test_duplicate_catalog_entries_are_matched_once() -> None:
    route = _route(20)
    gate = _gate_near(route, 0)

    matched = crossed_gates(route, TollCatalogSnapshot(gates=(gate, gate)), MatchConfig())

    assert len(matched) == 1


def test_crossed_gates_keeps_catalog_order_and_skips_far_gates() -> None:
    route = _route(30, spacing_deg=0.01)
    near_end = _gate_near(route, 29, gate_id=3)
    near_start = _gate_near(route, 0, gate_id=1)
    far = TollGate(gate_id=2, name="Far", location=GeoPoint(latitude=14.0, longitude=76.0))

    matched = crossed_gates(
        route, TollCatalogSnapshot(gates=(near_end, far, near_start)), MatchConfig()
    )

    assert [gate.gate_id for gate in matched] == [3, 1]


@pytest.mark.parametrize("catalog", [None, TollCatalogSnapshot()])
def test_empty_catalog_matches_nothing(catalog: TollCatalogSnapshot | None) -> None:
    assert crossed_gates(_route(10), catalog, MatchConfig()) == []
