"""Job-layer bootstrap orchestrator with stage timeline capture."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fleet_bootstrap.adapters import ArtifactFetcher, BootstrapError, NoToolsAvailableError, ToolDetectorPort
from fleet_bootstrap.domain import (
    ArtifactSpec,
    BootstrapStage,
    RuntimeContext,
    StageStatus,
    domain_build_stage_event,
)

from .cleanup_timer import CleanupTimer
from .config_emitter import job_config_write_document
from .interfaces import JobExecutionResult, JobOrchestratorPort
from .service_launcher import ServiceLauncher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapOrchestratorConfig:
    """Configuration values for one bootstrap run.

    Attributes:
        context: Immutable runtime context.
        artifacts: Artifacts fetched before any service launch.
    """

    context: RuntimeContext
    artifacts: tuple[ArtifactSpec, ...]


class BootstrapOrchestrator(JobOrchestratorPort):
    """Concrete orchestrator for detect, fetch, configure, launch and cleanup arming."""

    _BOOTSTRAP_JOB_NAME = "bootstrap_run"

    def __init__(
        self,
        tool_detector: ToolDetectorPort,
        artifact_fetcher: ArtifactFetcher,
        service_launcher: ServiceLauncher,
        cleanup_timer: CleanupTimer,
        config: BootstrapOrchestratorConfig,
    ):
        """Initialize bootstrap orchestrator dependencies.

        Args:
            tool_detector: Transfer tool discovery adapter.
            artifact_fetcher: Artifact download adapter.
            service_launcher: Sequenced service launcher.
            cleanup_timer: One-shot removal timer armed after full success.
            config: Bootstrap run configuration.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if tool_detector is None:
            raise ValueError("tool_detector must not be None")
        if artifact_fetcher is None:
            raise ValueError("artifact_fetcher must not be None")
        if service_launcher is None:
            raise ValueError("service_launcher must not be None")
        if cleanup_timer is None:
            raise ValueError("cleanup_timer must not be None")
        if not config.artifacts:
            raise ValueError("config.artifacts must not be empty")

        self._tool_detector = tool_detector
        self._artifact_fetcher = artifact_fetcher
        self._service_launcher = service_launcher
        self._cleanup_timer = cleanup_timer
        self._config = config

    def job_supported_names(self) -> tuple[str, ...]:
        """Return supported job names.

        Returns:
            tuple[str, ...]: Supported job names.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return (self._BOOTSTRAP_JOB_NAME,)

    async def job_execute(self, job_name: str) -> JobExecutionResult:
        """Execute the bootstrap workflow.

        Fatal bootstrap errors are converted into a `failed` result; the
        caller decides the process exit status.

        Args:
            job_name: Name of job to execute.

        Returns:
            JobExecutionResult: Final execution status payload with timeline.

        Raises:
            ValueError: Raised when job name is unsupported.
        """

        normalized_job_name = job_name.strip()
        if normalized_job_name != self._BOOTSTRAP_JOB_NAME:
            raise ValueError(f"unsupported job_name={normalized_job_name}")

        timeline: list[dict[str, object]] = [
            domain_build_stage_event(stage=BootstrapStage.RUN, status=StageStatus.STARTED)
        ]
        current_stage = BootstrapStage.DETECT
        try:
            tools = await self._tool_detector.adapter_detect_tools()
            if not tools:
                raise NoToolsAvailableError("Neither curl nor wget is available")
            timeline.append(
                domain_build_stage_event(
                    stage=current_stage, status=StageStatus.COMPLETED, details={"tools": [tool.value for tool in tools]}
                )
            )

            current_stage = BootstrapStage.FETCH
            await self._artifact_fetcher.adapter_fetch_batch(artifacts=self._config.artifacts, tools=tools)
            self._artifact_fetcher.adapter_mark_executable(self._config.artifacts)
            timeline.append(
                domain_build_stage_event(
                    stage=current_stage,
                    status=StageStatus.COMPLETED,
                    details={"artifacts": [artifact.destination.name for artifact in self._config.artifacts]},
                )
            )

            current_stage = BootstrapStage.CONFIG
            job_config_write_document(path=self._config.context.config_path, client_id=self._config.context.client_id)
            timeline.append(domain_build_stage_event(stage=current_stage, status=StageStatus.COMPLETED))

            current_stage = BootstrapStage.LAUNCH
            await self._service_launcher.launcher_start_all()
            timeline.append(
                domain_build_stage_event(
                    stage=current_stage,
                    status=StageStatus.COMPLETED,
                    details={key: state.value for key, state in self._service_launcher.launcher_states().items()},
                )
            )
        except BootstrapError as error:
            timeline.append(
                domain_build_stage_event(
                    stage=current_stage,
                    status=StageStatus.FAILED,
                    details={"error_code": error.error_code, "error_message": str(error)},
                )
            )
            logger.error("bootstrap failed at stage=%s: %s", current_stage.value, error)
            return JobExecutionResult(
                job_name=normalized_job_name,
                status="failed",
                error_code=error.error_code,
                error_message=str(error),
                timeline=timeline,
            )

        self._cleanup_timer.timer_arm(
            tuple(artifact.destination for artifact in self._config.artifacts) + (self._config.context.config_path,)
        )
        timeline.append(domain_build_stage_event(stage=BootstrapStage.CLEANUP, status=StageStatus.ARMED))
        timeline.append(domain_build_stage_event(stage=BootstrapStage.RUN, status=StageStatus.COMPLETED))
        logger.info("bootstrap completed")
        return JobExecutionResult(job_name=normalized_job_name, status="success", timeline=timeline)
