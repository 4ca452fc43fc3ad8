"""Artifact download with ordered transfer tool fallback."""

from __future__ import annotations

import asyncio
import logging
import stat
from pathlib import Path
from typing import Final, Sequence

from fleet_bootstrap.domain import ArtifactSpec, TransferTool

from .errors import ArtifactPermissionError, FetchExhaustedError, NoToolsAvailableError
from .interfaces import CommandRunnerPort

logger = logging.getLogger(__name__)


class ArtifactFetcher:
    """Download artifacts through external transfer tools.

    Each fetch walks the supplied tools strictly in order and only advances
    once the previous attempt's result is known. A result is accepted when
    the tool exits with zero and the destination holds a plausible payload.
    """

    MIN_VALID_SIZE_BYTES: Final[int] = 100

    def __init__(self, command_runner: CommandRunnerPort):
        """Initialize artifact fetcher.

        Args:
            command_runner: Process-boundary runner used to invoke transfer tools.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when command_runner is None.
        """

        if command_runner is None:
            raise ValueError("command_runner must not be None")
        self._command_runner = command_runner

    async def adapter_fetch(self, url: str, destination: Path, tools: Sequence[TransferTool]) -> None:
        """Fetch one URL to destination, falling back through tools in order.

        Args:
            url: Source resource URL.
            destination: Output file path, created or overwritten.
            tools: Ordered transfer tools to attempt.

        Returns:
            None: The destination file is the only result.

        Raises:
            NoToolsAvailableError: Raised when tools is empty, before any command runs.
            FetchExhaustedError: Raised when every tool failed.
        """

        if not tools:
            raise NoToolsAvailableError("No download tools available (curl or wget required)")

        for tool in tools:
            if await self._adapter_attempt(tool=tool, url=url, destination=destination):
                logger.info("fetched %s with %s", destination.name, tool.value)
                return
            logger.warning("fetch of %s with %s failed, trying next tool", destination.name, tool.value)

        raise FetchExhaustedError(url)

    async def adapter_fetch_batch(self, artifacts: Sequence[ArtifactSpec], tools: Sequence[TransferTool]) -> None:
        """Fetch all artifacts concurrently; the batch fails on the first failed fetch.

        Args:
            artifacts: Artifact specs to download.
            tools: Ordered transfer tools shared by every fetch.

        Returns:
            None: Destination files are the only result.

        Raises:
            NoToolsAvailableError: Raised when tools is empty.
            FetchExhaustedError: Raised for the first artifact that could not be fetched.
        """

        if not tools:
            raise NoToolsAvailableError("No download tools available (curl or wget required)")
        if not artifacts:
            return

        fetch_tasks = [
            asyncio.create_task(self.adapter_fetch(url=artifact.url, destination=artifact.destination, tools=tools))
            for artifact in artifacts
        ]
        done_tasks, pending_tasks = await asyncio.wait(fetch_tasks, return_when=asyncio.FIRST_EXCEPTION)
        for task in pending_tasks:
            task.cancel()
        if pending_tasks:
            await asyncio.gather(*pending_tasks, return_exceptions=True)

        for task in fetch_tasks:
            if task in done_tasks and not task.cancelled() and task.exception() is not None:
                raise task.exception()

    def adapter_mark_executable(self, artifacts: Sequence[ArtifactSpec]) -> None:
        """Add execute permission bits to every fetched artifact.

        Args:
            artifacts: Artifact specs whose destinations must be executable.

        Returns:
            None: Permission bits are updated in place.

        Raises:
            ArtifactPermissionError: Raised when a file mode cannot be changed.
        """

        execute_bits = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
        for artifact in artifacts:
            try:
                current_mode = artifact.destination.stat().st_mode
                artifact.destination.chmod(current_mode | execute_bits)
            except OSError as error:
                raise ArtifactPermissionError(f"cannot mark {artifact.destination} executable: {error}") from error

    async def _adapter_attempt(self, tool: TransferTool, url: str, destination: Path) -> bool:
        argv = tool.tool_build_download_command(url=url, destination=destination)
        try:
            exit_code = await self._command_runner.command_run(argv)
        except OSError as error:
            logger.debug("could not spawn %s: %s", tool.value, error)
            return False
        if exit_code != 0:
            return False
        return self._adapter_has_valid_payload(destination)

    def _adapter_has_valid_payload(self, destination: Path) -> bool:
        try:
            return destination.stat().st_size >= self.MIN_VALID_SIZE_BYTES
        except OSError:
            return False
