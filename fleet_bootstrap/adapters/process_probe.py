"""Process-table liveness probe backed by `pgrep -f`."""

from __future__ import annotations

import logging

from .interfaces import CommandRunnerPort, ProcessProbePort

logger = logging.getLogger(__name__)


class PgrepProcessProbe(ProcessProbePort):
    """Report liveness by full command-line pattern match.

    Matching is approximate: a token such as `api` also matches unrelated
    processes whose command line contains it.
    """

    def __init__(self, command_runner: CommandRunnerPort):
        if command_runner is None:
            raise ValueError("command_runner must not be None")
        self._command_runner = command_runner

    async def probe_is_running(self, token: str) -> bool:
        """Return True when `pgrep -f token` finds at least one process.

        Args:
            token: Command-line pattern.

        Returns:
            bool: Match result; any probe failure resolves to False.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        if not token.strip():
            return False
        try:
            exit_code = await self._command_runner.command_run(["pgrep", "-f", token])
        except OSError as error:
            logger.debug("pgrep unavailable for token=%s: %s", token, error)
            return False
        return exit_code == 0
