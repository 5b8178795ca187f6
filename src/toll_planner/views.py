from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from pydantic import ValidationError

from toll_planner.exceptions import (
    InvalidInputError,
    InvalidLocationError,
    NoRouteFoundError,
    UpstreamUnavailableError,
)
from toll_planner.models import TollGate
from toll_planner.schemas import PlaceResponse, TollEstimateRequest, TollGateResponse
from toll_planner.services.geocoding import GeocodingClient
from toll_planner.services.planner import TollPlannerService

_planner_service: TollPlannerService | None = None


def get_toll_planner() -> TollPlannerService:
    global _planner_service
    if _planner_service is None:
        _planner_service = TollPlannerService()
    return _planner_service


@require_GET
def health_view(_: HttpRequest) -> HttpResponse:
    return JsonResponse(
        {
            "status": "ok",
            "toll_gates": {"total": TollGate.objects.count()},
        }
    )


@require_GET
def toll_gates_view(_: HttpRequest) -> HttpResponse:
    gates = [
        TollGateResponse(
            id=gate.pk,
            name=gate.name,
            location={"lat": gate.latitude, "lng": gate.longitude},
            cost={
                "car": float(gate.cost_car),
                "bike": float(gate.cost_bike),
                "truck": float(gate.cost_truck) if gate.cost_truck is not None else None,
            },
            type=gate.gate_type,
        ).model_dump(mode="json")
        for gate in TollGate.objects.all()
    ]
    return JsonResponse(gates, safe=False)


@require_GET
def places_view(request: HttpRequest) -> HttpResponse:
    query = request.GET.get("q", "").strip()
    if len(query) < 3:
        return _error_response(
            "invalid_input", "Query parameter q must be at least 3 characters", status=400
        )

    try:
        results = GeocodingClient().search(query, limit=5)
    except InvalidInputError as exc:
        return _error_response("invalid_input", str(exc), status=400)
    except UpstreamUnavailableError as exc:
        return _error_response("upstream_error", str(exc), status=502)

    places = [
        PlaceResponse(
            name=result.display_name,
            location={
                "latitude": result.point.latitude,
                "longitude": result.point.longitude,
            },
        ).model_dump(mode="json")
        for result in results
    ]
    return JsonResponse(places, safe=False)


@csrf_exempt
@require_POST
def toll_estimate_view(request: HttpRequest) -> HttpResponse:
    payload = _parse_json_payload(request)
    if isinstance(payload, JsonResponse):
        return payload

    try:
        estimate_request = TollEstimateRequest.model_validate(payload)
    except ValidationError as exc:
        return JsonResponse(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Invalid request payload",
                    "details": exc.errors(include_context=False),
                }
            },
            status=400,
        )

    planner = get_toll_planner()
    try:
        response = planner.estimate(estimate_request)
    except InvalidLocationError as exc:
        return _error_response("invalid_location", str(exc), status=400)
    except InvalidInputError as exc:
        return _error_response("invalid_input", str(exc), status=400)
    except NoRouteFoundError as exc:
        return _error_response("no_route", str(exc), status=502)
    except UpstreamUnavailableError as exc:
        return _error_response("upstream_error", str(exc), status=502)

    return JsonResponse(response.model_dump(mode="json"), status=200)


def _parse_json_payload(request: HttpRequest) -> dict[str, Any] | JsonResponse:
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except json.JSONDecodeError:
        return _error_response("invalid_json", "Request body must be valid JSON", status=400)

    if not isinstance(payload, dict):
        return _error_response("invalid_json", "JSON body must be an object", status=400)

    return payload


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)
