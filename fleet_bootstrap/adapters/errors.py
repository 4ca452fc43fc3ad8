"""Project-native typed exceptions for fatal bootstrap failures."""

from __future__ import annotations


class BootstrapError(Exception):
    """Base exception for fatal bootstrap failures.

    Attributes:
        error_code: Deterministic error code recorded in the run result.
    """

    error_code = "BOOTSTRAP_FAILED"

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        if error_code is not None:
            self.error_code = error_code


class NoToolsAvailableError(BootstrapError, RuntimeError):
    """Neither supported transfer tool is present on the host."""

    error_code = "NO_TOOLS_AVAILABLE"


class FetchExhaustedError(BootstrapError, ConnectionError):
    """Every transfer tool failed or produced an implausibly small file for one URL."""

    error_code = "FETCH_EXHAUSTED"

    def __init__(self, url: str):
        super().__init__(f"All download attempts failed for {url}")
        self.url = url


class ArtifactPermissionError(BootstrapError, PermissionError):
    """A fetched artifact could not be marked executable."""

    error_code = "ARTIFACT_PERMISSION_FAILED"


class ConfigWriteFailedError(BootstrapError, OSError):
    """The generated runtime configuration could not be written."""

    error_code = "CONFIG_WRITE_FAILED"


class ServiceStartFailedError(BootstrapError, RuntimeError):
    """A launched service was not running after its grace period."""

    error_code = "SERVICE_START_FAILED"

    def __init__(self, service_name: str):
        super().__init__(f"Failed to start {service_name}")
        self.service_name = service_name
