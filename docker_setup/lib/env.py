from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


def _state_dir() -> Path:
    base = Path.home() / ".local" / "state"
    return base / "docker-setup"


@dataclass(frozen=True)
class Paths:
    os_release: str = "/etc/os-release"
    keyrings_dir: str = "/etc/apt/keyrings"
    keyring: str = "/etc/apt/keyrings/docker.gpg"
    sources_list: str = "/etc/apt/sources.list.d/docker.list"
    daemon_config: str = "/etc/docker/daemon.json"
    state_default: str = str(_state_dir() / "state.json")
    log_default: str = str(_state_dir() / "docker-setup.log")


PATHS = Paths()
