"""Domain models used across application layer boundaries."""

from .catalog import (
    ARTIFACT_FILE_NAMES,
    domain_build_artifact_specs,
    domain_build_service_specs,
)
from .models import (
    ArtifactSpec,
    HealthReport,
    RuntimeContext,
    ServiceLaunchState,
    ServiceSpec,
    TransferTool,
)
from .timeline import BootstrapStage, StageStatus, domain_build_stage_event

__all__ = [
    "ARTIFACT_FILE_NAMES",
    "ArtifactSpec",
    "BootstrapStage",
    "HealthReport",
    "RuntimeContext",
    "ServiceLaunchState",
    "ServiceSpec",
    "StageStatus",
    "TransferTool",
    "domain_build_artifact_specs",
    "domain_build_service_specs",
    "domain_build_stage_event",
]
