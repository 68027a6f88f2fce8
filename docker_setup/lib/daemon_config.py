"""Docker daemon configuration (``/etc/docker/daemon.json``).

The document is a fixed operational policy: bounded json-file logs, a
dedicated address pool, overlay2 storage and no userland proxy. It is
rendered deterministically and fully overwritten on every run, so repeated
runs leave a byte-identical file.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Sequence

from .files import ensure_dir, write_file

logger = logging.getLogger(__name__)

LOG_MAX_SIZE = "10m"
LOG_MAX_FILE = "3"
ADDRESS_POOL_BASE = "172.17.0.0/12"
ADDRESS_POOL_SIZE = 24


def daemon_policy() -> Dict[str, Any]:
    # Key order is part of the on-disk format.
    return {
        "log-driver": "json-file",
        "log-opts": {
            "max-size": LOG_MAX_SIZE,
            "max-file": LOG_MAX_FILE,
        },
        "default-address-pools": [
            {
                "base": ADDRESS_POOL_BASE,
                "size": ADDRESS_POOL_SIZE,
            }
        ],
        "userland-proxy": False,
        "live-restore": False,
        "storage-driver": "overlay2",
    }


def render_daemon_config() -> str:
    return json.dumps(daemon_policy(), indent=2) + "\n"


def write_daemon_config(path: str, *, sudo: Sequence[str], dry_run: bool = False) -> str:
    """Write the policy document to ``path``; returns the rendered text."""

    text = render_daemon_config()
    parent = os.path.dirname(path) or "/"
    ensure_dir(parent, sudo=sudo, dry_run=dry_run)
    write_file(path, text, sudo=sudo, dry_run=dry_run)
    logger.info("Wrote daemon configuration %s", path)
    return text
