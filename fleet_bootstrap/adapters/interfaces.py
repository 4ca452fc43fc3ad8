"""Typed interfaces for adapter-layer responsibilities."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from fleet_bootstrap.domain import TransferTool


class CommandRunnerPort(Protocol):
    """Port definition for running external commands at the process boundary."""

    async def command_run(self, argv: Sequence[str]) -> int:
        """Run one command to completion with output discarded.

        Args:
            argv: Argument vector, executed without a shell.

        Returns:
            int: Process exit code.

        Raises:
            OSError: Raised when the executable cannot be spawned.
        """

    async def command_run_shell(self, command: str, cwd: Path | None = None) -> int:
        """Run one shell command string to completion.

        Args:
            command: Shell command string.
            cwd: Optional working directory.

        Returns:
            int: Shell exit code.

        Raises:
            OSError: Raised when the shell cannot be spawned.
        """


class ProcessProbePort(Protocol):
    """Port definition for host process-table liveness queries."""

    async def probe_is_running(self, token: str) -> bool:
        """Return whether any process command line matches the token.

        Args:
            token: Command-line substring or pattern.

        Returns:
            bool: True when at least one process matches.

        Raises:
            RuntimeError: Implementations must not raise; failures resolve to False.
        """


class ToolDetectorPort(Protocol):
    """Port definition for transfer tool discovery."""

    async def adapter_detect_tools(self) -> tuple[TransferTool, ...]:
        """Return every present transfer tool in probe order.

        Returns:
            tuple[TransferTool, ...]: Present tools, possibly empty.

        Raises:
            RuntimeError: Implementations must not raise.
        """
