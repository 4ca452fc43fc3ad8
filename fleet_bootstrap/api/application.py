"""FastAPI application factory for the status and health surface."""

from __future__ import annotations

from typing import Callable, Final, Sequence

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from fleet_bootstrap.domain import RuntimeContext, ServiceSpec
from fleet_bootstrap.jobs import HealthAggregator

from .routers import api_create_health_router, api_create_status_router

LIVENESS_BANNER: Final[str] = ">>> fleet-bootstrap is up"


def create_api_application(
    context: RuntimeContext,
    health_aggregator: HealthAggregator,
    services: Sequence[ServiceSpec],
    time_provider: Callable[[], float] | None = None,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        context: Runtime context used by the status route.
        health_aggregator: Aggregator used by the health route.
        services: Services reported by the health route.
        time_provider: Optional wall-clock provider for the status route.

    Returns:
        FastAPI: Application with `/status`, `/health` and a catch-all banner.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """

    application = FastAPI(title="Fleet Bootstrap", docs_url=None, redoc_url=None, openapi_url=None)

    application.include_router(api_create_status_router(context=context, time_provider=time_provider))
    application.include_router(api_create_health_router(health_aggregator=health_aggregator, services=services))

    # Registered last so the explicit routes above win.
    @application.get("/{requested_path:path}", response_class=PlainTextResponse, include_in_schema=False)
    def foundation_banner(requested_path: str) -> str:
        _ = requested_path
        return LIVENESS_BANNER

    return application
