"""Transfer tool discovery on the host PATH."""

from __future__ import annotations

import asyncio
import logging
import shutil
from typing import Callable

from fleet_bootstrap.domain import TransferTool

from .interfaces import ToolDetectorPort

logger = logging.getLogger(__name__)


class ToolDetector(ToolDetectorPort):
    """Detect which supported transfer tools are installed."""

    def __init__(self, which: Callable[[str], str | None] | None = None):
        """Initialize tool detector.

        Args:
            which: Optional executable lookup, defaults to `shutil.which`.

        Returns:
            None: Initializer does not return a value.

        Raises:
            RuntimeError: Initializer does not raise runtime errors.
        """

        self._which = which or shutil.which

    async def adapter_detect_tools(self) -> tuple[TransferTool, ...]:
        """Probe every supported tool independently and keep all present ones.

        Returns:
            tuple[TransferTool, ...]: Present tools in probe order (curl before wget).

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        probe_order = tuple(TransferTool)
        lookups = await asyncio.gather(
            *(asyncio.to_thread(self._which, tool.executable) for tool in probe_order)
        )
        detected_tools = tuple(tool for tool, location in zip(probe_order, lookups) if location)
        logger.info("detected transfer tools: %s", [tool.value for tool in detected_tools] or "none")
        return detected_tools
