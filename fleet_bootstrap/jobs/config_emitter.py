"""Generated proxy runtime configuration document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from fleet_bootstrap.adapters import ConfigWriteFailedError

logger = logging.getLogger(__name__)


def job_config_build_document(client_id: str) -> dict[str, Any]:
    """Build the fixed-shape proxy configuration document.

    Only the inbound client identifier varies between runs.

    Args:
        client_id: Runtime identity placed in the inbound client entry.

    Returns:
        dict[str, Any]: JSON-serializable configuration document.

    Raises:
        ValueError: Raised when client_id is blank.
    """

    if not client_id.strip():
        raise ValueError("client_id must not be blank")

    return {
        "log": {"loglevel": "none"},
        "inbounds": [
            {
                "port": 9990,
                "listen": "127.0.0.1",
                "protocol": "vless",
                "settings": {
                    "clients": [{"id": client_id, "level": 0}],
                    "decryption": "none",
                },
                "streamSettings": {
                    "network": "ws",
                    "security": "none",
                    "wsSettings": {"path": "/xyz"},
                },
            }
        ],
        "dns": {"servers": ["1.1.1.1"]},
        "outbounds": [{"protocol": "freedom"}],
    }


def job_config_write_document(path: Path, client_id: str) -> Path:
    """Write the configuration document to path, replacing any previous file.

    Args:
        path: Target configuration file path.
        client_id: Runtime identity placed in the document.

    Returns:
        Path: Written configuration path.

    Raises:
        ConfigWriteFailedError: Raised when the file cannot be written.
    """

    document = job_config_build_document(client_id=client_id)
    try:
        path.write_text(json.dumps(document), encoding="utf-8")
    except OSError as error:
        raise ConfigWriteFailedError(f"cannot write runtime config to {path}: {error}") from error

    logger.info("wrote runtime config to %s", path)
    return path
