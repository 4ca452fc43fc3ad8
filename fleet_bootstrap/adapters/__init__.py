"""Adapter layer package for host process and network tool boundaries."""

from .artifact_fetcher import ArtifactFetcher
from .command_runner import AsyncSubprocessCommandRunner
from .errors import (
	ArtifactPermissionError,
	BootstrapError,
	ConfigWriteFailedError,
	FetchExhaustedError,
	NoToolsAvailableError,
	ServiceStartFailedError,
)
from .interfaces import CommandRunnerPort, ProcessProbePort, ToolDetectorPort
from .process_probe import PgrepProcessProbe
from .tool_detector import ToolDetector

__all__ = [
	"ArtifactFetcher",
	"ArtifactPermissionError",
	"AsyncSubprocessCommandRunner",
	"BootstrapError",
	"CommandRunnerPort",
	"ConfigWriteFailedError",
	"FetchExhaustedError",
	"NoToolsAvailableError",
	"PgrepProcessProbe",
	"ProcessProbePort",
	"ServiceStartFailedError",
	"ToolDetector",
	"ToolDetectorPort",
]
