"""Application bootstrap wiring for startup validation and dependency assembly."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI

from fleet_bootstrap.adapters import ArtifactFetcher, AsyncSubprocessCommandRunner, PgrepProcessProbe, ToolDetector
from fleet_bootstrap.api import create_api_application
from fleet_bootstrap.config import AppSettings
from fleet_bootstrap.domain import RuntimeContext, domain_build_artifact_specs, domain_build_service_specs
from fleet_bootstrap.jobs import (
    BootstrapOrchestrator,
    BootstrapOrchestratorConfig,
    CleanupTimer,
    HealthAggregator,
    ServiceLauncher,
)


@dataclass(frozen=True)
class BootstrapRuntime:
    """Wired runtime components sharing one runtime context.

    Attributes:
        context: Immutable runtime context.
        application: HTTP status and health application.
        orchestrator: Bootstrap workflow orchestrator.
        cleanup_timer: Timer armed by the orchestrator on success.
    """

    context: RuntimeContext
    application: FastAPI
    orchestrator: BootstrapOrchestrator
    cleanup_timer: CleanupTimer


def bootstrap_create_runtime_context(settings: AppSettings) -> RuntimeContext:
    """Freeze process-wide runtime values from validated settings.

    Args:
        settings: Validated application settings.

    Returns:
        RuntimeContext: Immutable runtime context.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return RuntimeContext(
        client_id=settings.client_id,
        server_token=settings.server_token,
        api_password=settings.api_password,
        agent_server_address=settings.agent_server_address,
        work_directory=settings.work_directory.resolve(),
    )


def bootstrap_create_runtime(settings: AppSettings) -> BootstrapRuntime:
    """Assemble the HTTP application and bootstrap orchestrator.

    Args:
        settings: Validated application settings.

    Returns:
        BootstrapRuntime: Fully wired runtime components.

    Raises:
        ValueError: Raised when component configuration is invalid.
    """

    context = bootstrap_create_runtime_context(settings)
    command_runner = AsyncSubprocessCommandRunner()
    health_aggregator = HealthAggregator(process_probe=PgrepProcessProbe(command_runner=command_runner))
    services = domain_build_service_specs(context)
    cleanup_timer = CleanupTimer()

    orchestrator = BootstrapOrchestrator(
        tool_detector=ToolDetector(),
        artifact_fetcher=ArtifactFetcher(command_runner=command_runner),
        service_launcher=ServiceLauncher(
            services=services,
            command_runner=command_runner,
            health_aggregator=health_aggregator,
            work_directory=context.work_directory,
        ),
        cleanup_timer=cleanup_timer,
        config=BootstrapOrchestratorConfig(
            context=context,
            artifacts=domain_build_artifact_specs(context, artifact_base_url=settings.artifact_base_url),
        ),
    )
    application = create_api_application(context=context, health_aggregator=health_aggregator, services=services)
    return BootstrapRuntime(
        context=context,
        application=application,
        orchestrator=orchestrator,
        cleanup_timer=cleanup_timer,
    )
