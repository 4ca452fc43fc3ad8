"""Concurrent liveness aggregation across launched services."""

from __future__ import annotations

import asyncio
from typing import Sequence

from fleet_bootstrap.adapters import ProcessProbePort
from fleet_bootstrap.domain import HealthReport, ServiceSpec


class HealthAggregator:
    """Combine per-service process probes into one health report.

    Reports are computed on every call and never cached.
    """

    def __init__(self, process_probe: ProcessProbePort):
        """Initialize health aggregator.

        Args:
            process_probe: Host process-table probe.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when process_probe is None.
        """

        if process_probe is None:
            raise ValueError("process_probe must not be None")
        self._process_probe = process_probe

    async def health_check_one(self, token: str) -> bool:
        """Return whether a process matching the token is running.

        Args:
            token: Command-line pattern.

        Returns:
            bool: Liveness flag; absence of evidence is False.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return await self._process_probe.probe_is_running(token)

    async def health_check_all(self, services: Sequence[ServiceSpec]) -> HealthReport:
        """Probe every service concurrently and join the results.

        Args:
            services: Services to check, in report order.

        Returns:
            HealthReport: Per-service flags with overall = logical AND.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        results = await asyncio.gather(*(self.health_check_one(service.health_token) for service in services))
        return HealthReport(services={service.key: bool(result) for service, result in zip(services, results)})
