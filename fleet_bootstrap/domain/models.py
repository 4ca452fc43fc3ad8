"""Typed domain models shared across runtime layers.

This module provides the immutable data contracts passed between the
fetch, launch, health and HTTP layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class TransferTool(Enum):
    """External file-transfer utility capable of fetching a URL to disk.

    Member declaration order is the probe order used by tool detection.
    """

    CURL = "curl"
    WGET = "wget"

    @property
    def executable(self) -> str:
        return self.value

    def tool_build_download_command(self, url: str, destination: Path) -> list[str]:
        """Build the download argv with fixed timeout/retry parameters and IPv4 resolution.

        Args:
            url: Source resource URL.
            destination: Output file path, overwritten by the tool.

        Returns:
            list[str]: Argument vector suitable for direct execution.

        Raises:
            ValueError: Raised for an unsupported tool member.
        """

        if self is TransferTool.CURL:
            return [
                "curl",
                "-4",
                "-sL",
                "--connect-timeout",
                "30",
                "--max-time",
                "300",
                url,
                "-o",
                str(destination),
            ]
        if self is TransferTool.WGET:
            return ["wget", "-q", "-4", "--timeout=30", "--tries=3", url, "-O", str(destination)]
        raise ValueError(f"unsupported transfer tool={self.value}")


class ServiceLaunchState(Enum):
    """Launch lifecycle state for one service."""

    NOT_STARTED = "not_started"
    LAUNCHED = "launched"
    VERIFIED = "verified"
    FAILED = "failed"


@dataclass(frozen=True)
class RuntimeContext:
    """Process-wide immutable runtime values built once at startup.

    Attributes:
        client_id: Generated or configured runtime identity.
        server_token: Secret token for the tunnel service.
        api_password: Password for the reporting agent service.
        agent_server_address: `host:port` target of the reporting agent.
        work_directory: Directory holding artifacts and generated config.
    """

    client_id: str
    server_token: str = field(repr=False)
    api_password: str = field(repr=False)
    agent_server_address: str
    work_directory: Path

    @property
    def config_path(self) -> Path:
        return self.work_directory / "web.json"


@dataclass(frozen=True)
class ArtifactSpec:
    """One executable to download.

    Attributes:
        url: Source resource URL.
        destination: Local file path the artifact is written to.
    """

    url: str
    destination: Path


@dataclass(frozen=True)
class ServiceSpec:
    """One service in the ordered launch sequence.

    The orchestrator never owns the launched process. It only keeps the
    health token used to find it in the process table.

    Attributes:
        key: Stable key used in health payloads.
        display_name: Human-readable service name.
        launch_command: Shell command string that starts the service.
        health_token: Command-line pattern used for liveness checks.
    """

    key: str
    display_name: str
    launch_command: str = field(repr=False)
    health_token: str


@dataclass(frozen=True)
class HealthReport:
    """Point-in-time liveness for a named set of services.

    Attributes:
        services: Mapping of service key to running flag, in query order.
    """

    services: dict[str, bool]

    @property
    def overall(self) -> bool:
        return all(self.services.values())

    def report_render(self) -> dict[str, object]:
        """Render the report into its HTTP payload shape.

        Returns:
            dict[str, object]: Per-service `running`/`stopped` and overall `healthy`/`degraded`.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "services": {key: "running" if running else "stopped" for key, running in self.services.items()},
            "overall": "healthy" if self.overall else "degraded",
        }
