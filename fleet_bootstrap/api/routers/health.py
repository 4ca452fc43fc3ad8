"""Health endpoint router composition for launched service checks."""

from __future__ import annotations

from typing import Sequence

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from fleet_bootstrap.domain import ServiceSpec
from fleet_bootstrap.jobs import HealthAggregator


def api_create_health_router(health_aggregator: HealthAggregator, services: Sequence[ServiceSpec]) -> APIRouter:
    """Create health-check router reporting per-service and overall liveness.

    Args:
        health_aggregator: Job-layer health aggregator.
        services: Services reported on every request.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when health_aggregator is None.
    """

    if health_aggregator is None:
        raise ValueError("health_aggregator must not be None")
    reported_services = tuple(services)

    router = APIRouter(tags=["health"])

    @router.get("/health")
    async def api_health_status() -> JSONResponse:
        """Return fresh per-service liveness and overall state.

        Degradation is reported in the body; the HTTP status is always 200.

        Returns:
            JSONResponse: Health payload for external monitoring.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        report = await health_aggregator.health_check_all(reported_services)
        return JSONResponse(content=report.report_render(), status_code=status.HTTP_200_OK)

    return router
