"""Sequenced detached service launch with post-launch health verification."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Final, Sequence

from fleet_bootstrap.adapters import CommandRunnerPort, ServiceStartFailedError
from fleet_bootstrap.domain import ServiceLaunchState, ServiceSpec

from .health_aggregator import HealthAggregator

logger = logging.getLogger(__name__)


class ServiceLauncher:
    """Start services one at a time, gating each on the previous one's health.

    Launched processes are unmanaged children: the launcher keeps no handle
    on them, only the health token each service carries. A failed verification
    aborts the sequence and leaves earlier services running.
    """

    DEFAULT_GRACE_SECONDS: Final[float] = 2.0

    def __init__(
        self,
        services: Sequence[ServiceSpec],
        command_runner: CommandRunnerPort,
        health_aggregator: HealthAggregator,
        work_directory: Path,
        grace_seconds: float = DEFAULT_GRACE_SECONDS,
        sleep_provider: Callable[[float], Awaitable[None]] | None = None,
    ):
        """Initialize service launcher.

        Args:
            services: Ordered services to launch.
            command_runner: Process-boundary runner for shell launches.
            health_aggregator: Liveness checker used after each grace period.
            work_directory: Working directory for launch commands.
            grace_seconds: Fixed wait between launch and health check.
            sleep_provider: Optional awaitable sleep, defaults to `asyncio.sleep`.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or values are invalid.
        """

        if command_runner is None:
            raise ValueError("command_runner must not be None")
        if health_aggregator is None:
            raise ValueError("health_aggregator must not be None")
        if grace_seconds < 0:
            raise ValueError("grace_seconds must be >= 0")
        service_keys = [service.key for service in services]
        if len(set(service_keys)) != len(service_keys):
            raise ValueError("service keys must be unique")

        self._services = tuple(services)
        self._command_runner = command_runner
        self._health_aggregator = health_aggregator
        self._work_directory = work_directory
        self._grace_seconds = grace_seconds
        self._sleep = sleep_provider or asyncio.sleep
        self._states: dict[str, ServiceLaunchState] = {
            service.key: ServiceLaunchState.NOT_STARTED for service in self._services
        }

    def launcher_states(self) -> dict[str, ServiceLaunchState]:
        """Return a snapshot of per-service launch states.

        Returns:
            dict[str, ServiceLaunchState]: State keyed by service key, in launch order.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return dict(self._states)

    async def launcher_start_all(self) -> None:
        """Launch and verify every service strictly in order.

        Returns:
            None: All services reached `VERIFIED` when this returns.

        Raises:
            ServiceStartFailedError: Raised for the first service that fails to launch or verify.
        """

        for service in self._services:
            await self._launcher_start_one(service)

    async def _launcher_start_one(self, service: ServiceSpec) -> None:
        logger.info("launching %s", service.display_name)
        try:
            exit_code = await self._command_runner.command_run_shell(
                self._launcher_build_detached_command(service),
                cwd=self._work_directory,
            )
        except OSError as error:
            self._states[service.key] = ServiceLaunchState.FAILED
            raise ServiceStartFailedError(service.display_name) from error
        if exit_code != 0:
            self._states[service.key] = ServiceLaunchState.FAILED
            raise ServiceStartFailedError(service.display_name)

        self._states[service.key] = ServiceLaunchState.LAUNCHED
        await self._sleep(self._grace_seconds)

        if not await self._health_aggregator.health_check_one(service.health_token):
            self._states[service.key] = ServiceLaunchState.FAILED
            logger.error("%s is not running after %.1fs", service.display_name, self._grace_seconds)
            raise ServiceStartFailedError(service.display_name)

        self._states[service.key] = ServiceLaunchState.VERIFIED
        logger.info("%s verified", service.display_name)

    @staticmethod
    def _launcher_build_detached_command(service: ServiceSpec) -> str:
        return f"nohup {service.launch_command} >/dev/null 2>&1 &"
