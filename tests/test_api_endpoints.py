"""Tests for status, health and banner endpoint behavior."""

from __future__ import annotations

import itertools
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fleet_bootstrap.api import LIVENESS_BANNER, create_api_application
from fleet_bootstrap.domain import RuntimeContext, domain_build_service_specs
from fleet_bootstrap.jobs import HealthAggregator


class _RecordingProbe:
    """Probe stub answering from a mutable running set and recording queries."""

    def __init__(self, running_tokens: set[str]):
        self.running_tokens = running_tokens
        self.calls: list[str] = []

    async def probe_is_running(self, token: str) -> bool:
        self.calls.append(token)
        return token in self.running_tokens


def _build_context() -> RuntimeContext:
    return RuntimeContext(
        client_id="client-under-test",
        server_token="tunnel-secret",
        api_password="agent-secret",
        agent_server_address="agent.test:443",
        work_directory=Path("/nonexistent/work"),
    )


def _build_client(probe: _RecordingProbe) -> TestClient:
    context = _build_context()
    application = create_api_application(
        context=context,
        health_aggregator=HealthAggregator(process_probe=probe),
        services=domain_build_service_specs(context),
        time_provider=lambda: 1700000000.5,
    )
    return TestClient(application)


def test_api_status_returns_identity_without_probing() -> None:
    """Return running status, millisecond timestamp and client id immediately.

    Returns:
        None: Assertions validate status payload.

    Raises:
        AssertionError: Raised when payload is wrong or a probe ran.
    """

    probe = _RecordingProbe(set())
    client = _build_client(probe)

    response = client.get("/status")

    assert response.status_code == 200
    assert response.json() == {
        "status": "running",
        "timestamp": 1700000000500,
        "clientId": "client-under-test",
    }
    assert probe.calls == []


@pytest.mark.parametrize("states", list(itertools.product((True, False), repeat=3)))
def test_api_health_reports_each_service_and_overall(states: tuple[bool, bool, bool]) -> None:
    """Report per-service state and overall for every combination with HTTP 200.

    Args:
        states: Running flags for tunnel, proxy and api.

    Returns:
        None: Assertions validate health payload.

    Raises:
        AssertionError: Raised when aggregation or status code is wrong.
    """

    tokens = ("server tunnel", "web.js", "api")
    probe = _RecordingProbe({token for token, running in zip(tokens, states) if running})
    client = _build_client(probe)

    response = client.get("/health")

    assert response.status_code == 200
    expected_labels = ["running" if running else "stopped" for running in states]
    assert response.json() == {
        "services": dict(zip(("tunnel", "proxy", "api"), expected_labels)),
        "overall": "healthy" if all(states) else "degraded",
    }
    assert sorted(probe.calls) == sorted(tokens)


def test_api_health_is_recomputed_per_request() -> None:
    probe = _RecordingProbe({"server tunnel", "web.js", "api"})
    client = _build_client(probe)

    assert client.get("/health").json()["overall"] == "healthy"
    probe.running_tokens.clear()
    assert client.get("/health").json()["overall"] == "degraded"


@pytest.mark.parametrize("path", ["/", "/index.html", "/some/nested/path"])
def test_api_other_paths_return_plaintext_banner(path: str) -> None:
    probe = _RecordingProbe(set())

    response = _build_client(probe).get(path)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == LIVENESS_BANNER
    assert probe.calls == []
