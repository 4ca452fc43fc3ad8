"""Regression tests for bootstrap orchestration stages and failure handling."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Sequence

import pytest

from fleet_bootstrap.adapters import ArtifactFetcher
from fleet_bootstrap.domain import (
    RuntimeContext,
    TransferTool,
    domain_build_artifact_specs,
    domain_build_service_specs,
)
from fleet_bootstrap.jobs import (
    BootstrapOrchestrator,
    BootstrapOrchestratorConfig,
    CleanupTimer,
    HealthAggregator,
    ServiceLauncher,
)

_VALID_PAYLOAD = b"#!/bin/sh\n" + b"#" * 200


class _StaticToolDetector:
    def __init__(self, tools: tuple[TransferTool, ...]):
        self._tools = tools

    async def adapter_detect_tools(self) -> tuple[TransferTool, ...]:
        return self._tools


class _FakeHost:
    """Host double serving downloads, detached launches and pgrep probes."""

    def __init__(self, dead_tokens: set[str] | None = None, failing_urls: set[str] | None = None):
        self.download_calls: list[list[str]] = []
        self.shell_commands: list[str] = []
        self._dead_tokens = dead_tokens or set()
        self._failing_urls = failing_urls or set()
        self._running_tokens: set[str] = set()

    async def command_run(self, argv: Sequence[str]) -> int:
        argv_list = list(argv)
        if argv_list[0] == "pgrep":
            return 0 if argv_list[-1] in self._running_tokens else 1
        self.download_calls.append(argv_list)
        url = next(argument for argument in argv_list if argument.startswith("https://"))
        if url in self._failing_urls:
            return 22
        Path(argv_list[-1]).write_bytes(_VALID_PAYLOAD)
        return 0

    async def command_run_shell(self, command: str, cwd: Path | None = None) -> int:
        self.shell_commands.append(command)
        for token in ("server tunnel", "web.js", "api"):
            if f"./{token.split()[0]}" in command and token not in self._dead_tokens:
                self._running_tokens.add(token)
        return 0


async def _instant_sleep(_seconds: float) -> None:
    return None


def _build_orchestrator(
    work_directory: Path,
    host: _FakeHost,
    tools: tuple[TransferTool, ...] = (TransferTool.CURL, TransferTool.WGET),
) -> tuple[BootstrapOrchestrator, CleanupTimer, RuntimeContext]:
    context = RuntimeContext(
        client_id="client-under-test",
        server_token="tunnel-secret",
        api_password="agent-secret",
        agent_server_address="agent.test:443",
        work_directory=work_directory,
    )
    health_aggregator = HealthAggregator(process_probe=_PgrepViaHost(host))
    cleanup_timer = CleanupTimer(sleep_provider=_instant_sleep)
    orchestrator = BootstrapOrchestrator(
        tool_detector=_StaticToolDetector(tools),
        artifact_fetcher=ArtifactFetcher(command_runner=host),
        service_launcher=ServiceLauncher(
            services=domain_build_service_specs(context),
            command_runner=host,
            health_aggregator=health_aggregator,
            work_directory=work_directory,
            sleep_provider=_instant_sleep,
        ),
        cleanup_timer=cleanup_timer,
        config=BootstrapOrchestratorConfig(
            context=context,
            artifacts=domain_build_artifact_specs(context, artifact_base_url="https://dl.test/fleet"),
        ),
    )
    return orchestrator, cleanup_timer, context


class _PgrepViaHost:
    def __init__(self, host: _FakeHost):
        self._host = host

    async def probe_is_running(self, token: str) -> bool:
        return await self._host.command_run(["pgrep", "-f", token]) == 0


async def _drain_event_loop() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_jobs_bootstrap_success_runs_all_stages_and_arms_cleanup(tmp_path: Path) -> None:
    """Fetch, configure, launch, then arm cleanup that removes every file.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate successful bootstrap flow.

    Raises:
        AssertionError: Raised when a stage is skipped or misordered.
    """

    host = _FakeHost()
    orchestrator, cleanup_timer, context = _build_orchestrator(tmp_path, host)

    result = await orchestrator.job_execute(job_name="bootstrap_run")

    assert result.status == "success"
    assert result.error_code is None
    assert [event["stage"] for event in result.timeline] == [
        "run",
        "detect",
        "fetch",
        "config",
        "launch",
        "cleanup",
        "run",
    ]
    assert len(host.download_calls) == 3
    assert all(call[0] == "curl" for call in host.download_calls)
    assert len(host.shell_commands) == 3
    assert cleanup_timer.timer_is_armed is True

    config_document = json.loads(context.config_path.read_text(encoding="utf-8"))
    assert config_document["inbounds"][0]["settings"]["clients"][0]["id"] == "client-under-test"
    assert all((tmp_path / name).stat().st_mode & 0o111 for name in ("api", "server", "web.js"))

    await _drain_event_loop()

    assert cleanup_timer.timer_has_fired is True
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_jobs_bootstrap_without_tools_fails_before_fetching(tmp_path: Path) -> None:
    host = _FakeHost()
    orchestrator, cleanup_timer, context = _build_orchestrator(tmp_path, host, tools=())

    result = await orchestrator.job_execute(job_name="bootstrap_run")

    assert result.status == "failed"
    assert result.error_code == "NO_TOOLS_AVAILABLE"
    assert result.timeline[-1]["stage"] == "detect"
    assert host.download_calls == []
    assert host.shell_commands == []
    assert not context.config_path.exists()
    assert cleanup_timer.timer_is_armed is False


@pytest.mark.asyncio
async def test_jobs_bootstrap_fetch_exhaustion_aborts_before_config(tmp_path: Path) -> None:
    host = _FakeHost(failing_urls={"https://dl.test/fleet/server"})
    orchestrator, cleanup_timer, context = _build_orchestrator(tmp_path, host)

    result = await orchestrator.job_execute(job_name="bootstrap_run")

    assert result.status == "failed"
    assert result.error_code == "FETCH_EXHAUSTED"
    assert "https://dl.test/fleet/server" in (result.error_message or "")
    assert not context.config_path.exists()
    assert host.shell_commands == []
    assert cleanup_timer.timer_is_armed is False


@pytest.mark.asyncio
async def test_jobs_bootstrap_service_failure_never_arms_cleanup(tmp_path: Path) -> None:
    """Return failed result and leave files when a service does not verify.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate abort semantics.

    Raises:
        AssertionError: Raised when cleanup is armed or later services launch.
    """

    host = _FakeHost(dead_tokens={"server tunnel"})
    orchestrator, cleanup_timer, context = _build_orchestrator(tmp_path, host)

    result = await orchestrator.job_execute(job_name="bootstrap_run")
    await _drain_event_loop()

    assert result.status == "failed"
    assert result.error_code == "SERVICE_START_FAILED"
    assert result.timeline[-1]["stage"] == "launch"
    assert len(host.shell_commands) == 1
    assert cleanup_timer.timer_is_armed is False
    assert context.config_path.exists()


@pytest.mark.asyncio
async def test_jobs_bootstrap_rejects_unknown_job_name(tmp_path: Path) -> None:
    orchestrator, _, _ = _build_orchestrator(tmp_path, _FakeHost())

    assert orchestrator.job_supported_names() == ("bootstrap_run",)
    with pytest.raises(ValueError, match="unsupported job_name"):
        await orchestrator.job_execute(job_name="ingestion_run")
