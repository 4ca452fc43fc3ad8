"""Instantaneous self-status endpoint router."""

from __future__ import annotations

import time
from typing import Callable

from fastapi import APIRouter

from fleet_bootstrap.domain import RuntimeContext


def api_create_status_router(
    context: RuntimeContext,
    time_provider: Callable[[], float] | None = None,
) -> APIRouter:
    """Create router exposing the `/status` endpoint.

    The handler performs no probe and no disk access.

    Args:
        context: Runtime context providing the client identity.
        time_provider: Optional wall-clock provider in epoch seconds.

    Returns:
        APIRouter: Router exposing `/status`.

    Raises:
        ValueError: Raised when context is None.
    """

    if context is None:
        raise ValueError("context must not be None")
    resolved_time_provider = time_provider or time.time

    router = APIRouter(tags=["status"])

    @router.get("/status")
    def api_status() -> dict[str, object]:
        return {
            "status": "running",
            "timestamp": int(resolved_time_provider() * 1000),
            "clientId": context.client_id,
        }

    return router
