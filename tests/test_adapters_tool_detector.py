"""Tests for transfer tool detection ordering and empty results."""

from __future__ import annotations

import pytest

from fleet_bootstrap.adapters import ToolDetector
from fleet_bootstrap.domain import TransferTool


def _which_from(installed: set[str]):
    def _which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in installed else None

    return _which


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("installed", "expected"),
    [
        ({"curl", "wget"}, (TransferTool.CURL, TransferTool.WGET)),
        ({"wget"}, (TransferTool.WGET,)),
        ({"curl"}, (TransferTool.CURL,)),
        (set(), ()),
    ],
)
async def test_adapters_tool_detector_keeps_every_present_tool_in_probe_order(
    installed: set[str],
    expected: tuple[TransferTool, ...],
) -> None:
    """Return all present tools, curl before wget, and never fail.

    Args:
        installed: Tool names the fake lookup reports as present.
        expected: Expected detection result.

    Returns:
        None: Assertions validate detection output.

    Raises:
        AssertionError: Raised when ordering or membership is wrong.
    """

    detector = ToolDetector(which=_which_from(installed))

    assert await detector.adapter_detect_tools() == expected


@pytest.mark.asyncio
async def test_adapters_tool_detector_probes_both_tools_independently() -> None:
    probed: list[str] = []

    def _which(name: str) -> str | None:
        probed.append(name)
        return "/usr/bin/curl" if name == "curl" else None

    await ToolDetector(which=_which).adapter_detect_tools()

    assert sorted(probed) == ["curl", "wget"]
