"""Bootstrap run timeline vocabulary and event payloads."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any


class BootstrapStage(Enum):
    """Pipeline stages recorded on a bootstrap run timeline, in execution order."""

    RUN = "run"
    DETECT = "detect"
    FETCH = "fetch"
    CONFIG = "config"
    LAUNCH = "launch"
    CLEANUP = "cleanup"


class StageStatus(Enum):
    """Outcome markers for one timeline entry."""

    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"
    ARMED = "armed"


def domain_build_stage_event(
    stage: BootstrapStage,
    status: StageStatus,
    details: dict[str, Any] | None = None,
    occurred_at: datetime | None = None,
) -> dict[str, object]:
    """Build one bootstrap timeline entry with wire-form stage and status labels.

    Args:
        stage: Pipeline stage the entry belongs to.
        status: Outcome marker for the stage.
        details: Optional structured details object.
        occurred_at: Optional timezone-aware timestamp, defaults to now in UTC.

    Returns:
        dict[str, object]: Timeline entry with `stage`, `status`, `at_utc` and optional `details`.

    Raises:
        ValueError: Raised when stage, status or timestamp are not valid timeline values.
    """

    if not isinstance(stage, BootstrapStage):
        raise ValueError(f"unknown bootstrap stage: {stage!r}")
    if not isinstance(status, StageStatus):
        raise ValueError(f"unknown stage status: {status!r}")
    if occurred_at is not None and occurred_at.tzinfo is None:
        raise ValueError("occurred_at must be timezone-aware")

    event_time = (occurred_at or datetime.now(timezone.utc)).astimezone(timezone.utc)
    event_payload: dict[str, object] = {
        "stage": stage.value,
        "status": status.value,
        "at_utc": event_time.isoformat(),
    }
    if details is not None:
        event_payload["details"] = details
    return event_payload
