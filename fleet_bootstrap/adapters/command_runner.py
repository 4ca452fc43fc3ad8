"""Asyncio subprocess implementation of the command runner port."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from pathlib import Path
from typing import Sequence

from .interfaces import CommandRunnerPort

logger = logging.getLogger(__name__)


class AsyncSubprocessCommandRunner(CommandRunnerPort):
    """Run external commands on the event loop with stdio detached."""

    async def command_run(self, argv: Sequence[str]) -> int:
        """Run one argv to completion without a shell.

        Args:
            argv: Argument vector.

        Returns:
            int: Process exit code.

        Raises:
            ValueError: Raised when argv is empty.
            OSError: Raised when the executable cannot be spawned.
            asyncio.CancelledError: Raised after the child is killed and reaped on cancellation.
        """

        if not argv:
            raise ValueError("argv must not be empty")

        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        exit_code = await _command_wait_or_kill(process)
        logger.debug("command %s exited with %s", argv[0], exit_code)
        return exit_code

    async def command_run_shell(self, command: str, cwd: Path | None = None) -> int:
        """Run one command string through `/bin/sh`.

        Args:
            command: Shell command string.
            cwd: Optional working directory.

        Returns:
            int: Shell exit code.

        Raises:
            ValueError: Raised when command is blank.
            OSError: Raised when the shell cannot be spawned.
        """

        if not command.strip():
            raise ValueError("command must not be blank")

        process = await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
            cwd=str(cwd) if cwd is not None else None,
        )
        return await _command_wait_or_kill(process)


async def _command_wait_or_kill(process: asyncio.subprocess.Process) -> int:
    try:
        return await process.wait()
    except asyncio.CancelledError:
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            logger.debug("killed pid %s on cancellation", process.pid)
        raise
