"""Delayed best-effort removal of fetched artifacts and generated config."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Final, Sequence

logger = logging.getLogger(__name__)


def job_cleanup_remove_paths(paths: Sequence[Path]) -> None:
    """Delete each path, ignoring every failure.

    The outcome is intentionally discarded: cleanup is disk hygiene and must
    never affect the running services or the process exit status.

    Args:
        paths: Files to remove.

    Returns:
        None: Nothing is reported back to the caller.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    for path in paths:
        try:
            path.unlink(missing_ok=True)
        except OSError as error:
            logger.debug("cleanup skipped %s: %s", path, error)


class CleanupTimer:
    """One-shot timer that removes bootstrap files after a fixed delay."""

    DEFAULT_DELAY_SECONDS: Final[float] = 30.0

    def __init__(
        self,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        sleep_provider: Callable[[float], Awaitable[None]] | None = None,
    ):
        """Initialize cleanup timer.

        Args:
            delay_seconds: Fixed delay between arming and removal.
            sleep_provider: Optional awaitable sleep, defaults to `asyncio.sleep`.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when delay_seconds is negative.
        """

        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self._delay_seconds = delay_seconds
        self._sleep = sleep_provider or asyncio.sleep
        self._task: asyncio.Task[None] | None = None
        self._fired = False

    @property
    def timer_is_armed(self) -> bool:
        return self._task is not None

    @property
    def timer_has_fired(self) -> bool:
        return self._fired

    def timer_arm(self, paths: Sequence[Path]) -> asyncio.Task[None]:
        """Schedule one removal of paths on the running event loop.

        Args:
            paths: Files to remove when the delay elapses.

        Returns:
            asyncio.Task[None]: Scheduled timer task.

        Raises:
            RuntimeError: Raised when the timer is already armed or no loop is running.
        """

        if self._task is not None:
            raise RuntimeError("cleanup timer is already armed")
        self._task = asyncio.get_running_loop().create_task(self._timer_run(tuple(paths)))
        logger.info("cleanup armed for %d paths in %.0fs", len(paths), self._delay_seconds)
        return self._task

    async def timer_cancel(self) -> None:
        """Cancel a pending removal without touching the files.

        Returns:
            None: Pending task, if any, is cancelled and awaited.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        if self._task is None or self._task.done():
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)

    async def _timer_run(self, paths: tuple[Path, ...]) -> None:
        await self._sleep(self._delay_seconds)
        job_cleanup_remove_paths(paths)
        self._fired = True
        logger.info("cleanup removed bootstrap files")
