from __future__ import annotations

from toll_planner.services.types import ComparisonResult, RouteCostResult


def compare_routes(
    standard: RouteCostResult,
    alternate: RouteCostResult | None,
) -> ComparisonResult:
    """Surface the alternate only when it is strictly cheaper overall.

    A toll-free detour whose extra fuel outweighs the tolls it avoids is not a
    recommendation, and neither is one that merely ties the standard route.
    """
    if alternate is None or not alternate.total_cost < standard.total_cost:
        return ComparisonResult(standard=standard)

    return ComparisonResult(
        standard=standard,
        alternate=alternate,
        savings=standard.total_cost - alternate.total_cost,
        extra_time_min=alternate.route.duration_min - standard.route.duration_min,
    )
