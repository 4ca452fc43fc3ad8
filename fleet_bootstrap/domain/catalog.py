"""Fixed artifact and service catalogs for one bootstrap run."""

from __future__ import annotations

import shlex
from typing import Final

from .models import ArtifactSpec, RuntimeContext, ServiceSpec

ARTIFACT_FILE_NAMES: Final[tuple[str, ...]] = ("api", "server", "web.js")


def domain_build_artifact_specs(context: RuntimeContext, artifact_base_url: str) -> tuple[ArtifactSpec, ...]:
    """Build the three artifact download specs.

    Args:
        context: Runtime context holding the work directory.
        artifact_base_url: Base URL each artifact file name is appended to.

    Returns:
        tuple[ArtifactSpec, ...]: Artifact specs in catalog order.

    Raises:
        ValueError: Raised when artifact_base_url is blank.
    """

    normalized_base_url = artifact_base_url.strip().rstrip("/")
    if not normalized_base_url:
        raise ValueError("artifact_base_url must not be blank")

    return tuple(
        ArtifactSpec(url=f"{normalized_base_url}/{file_name}", destination=context.work_directory / file_name)
        for file_name in ARTIFACT_FILE_NAMES
    )


def domain_build_service_specs(context: RuntimeContext) -> tuple[ServiceSpec, ...]:
    """Build the ordered service launch list.

    Launch order is significant: the proxy consumes the generated config and
    each later service assumes the earlier ones are already up. Secrets are
    shell-quoted because launch commands run through `/bin/sh`.

    Args:
        context: Runtime context holding secrets and paths.

    Returns:
        tuple[ServiceSpec, ...]: Service specs in launch order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return (
        ServiceSpec(
            key="tunnel",
            display_name="Cloudflare Tunnel",
            launch_command=(
                "./server tunnel --edge-ip-version 4 run --protocol http2"
                f" --token {shlex.quote(context.server_token)}"
            ),
            health_token="server tunnel",
        ),
        ServiceSpec(
            key="proxy",
            display_name="Xray Proxy",
            launch_command=f"./web.js -c ./{context.config_path.name}",
            health_token="web.js",
        ),
        ServiceSpec(
            key="api",
            display_name="API Service",
            launch_command=(
                "./api"
                f" -s {shlex.quote(context.agent_server_address)}"
                f" -p {shlex.quote(context.api_password)}"
                " --report-delay 2 --tls"
            ),
            health_token="api",
        ),
    )
