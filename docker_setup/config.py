from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .lib.env import PATHS

DEFAULTS: Dict[str, Any] = {
    "platform": {
        "id": "ubuntu",
        "version_id": "24.04",
        "os_release": PATHS.os_release,
    },
    "repository": {
        "url": "https://download.docker.com/linux/ubuntu",
        "key_url": "https://download.docker.com/linux/ubuntu/gpg",
        "keyrings_dir": PATHS.keyrings_dir,
        "keyring": PATHS.keyring,
        "sources_list": PATHS.sources_list,
        "channel": "stable",
    },
    "packages": {
        "prerequisites": ["ca-certificates", "curl", "gnupg", "lsb-release"],
        "legacy": ["docker", "docker-engine", "docker.io", "containerd", "runc"],
        "runtime": [
            "docker-ce",
            "docker-ce-cli",
            "containerd.io",
            "docker-buildx-plugin",
            "docker-compose-plugin",
        ],
    },
    "docker": {
        "group": "docker",
        "services": ["docker.service", "containerd.service"],
        "restart_unit": "docker",
        "daemon_config": PATHS.daemon_config,
        "verify_image": "hello-world",
    },
    "sudo": ["sudo"],
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(DEFAULTS))
    dry_run: bool = False

    @classmethod
    def from_state(cls, state: Dict[str, Any]) -> "ProvisionConfig":
        cfg = dict(state.get("config") or {})
        dry_run = bool(cfg.pop("dry_run", False))
        return cls(raw=_merge(DEFAULTS, cfg), dry_run=dry_run)

    def to_state(self) -> Dict[str, Any]:
        out = copy.deepcopy(self.raw)
        out["dry_run"] = self.dry_run
        return out

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def sudo(self) -> List[str]:
        return [str(a) for a in (self.raw.get("sudo") or [])]

    @property
    def expected_os_id(self) -> str:
        return str(self._section("platform").get("id") or "ubuntu")

    @property
    def expected_os_version(self) -> str:
        return str(self._section("platform").get("version_id") or "24.04")

    @property
    def os_release_path(self) -> str:
        return str(self._section("platform").get("os_release") or PATHS.os_release)

    @property
    def repo_url(self) -> str:
        return str(self._section("repository")["url"])

    @property
    def key_url(self) -> str:
        return str(self._section("repository")["key_url"])

    @property
    def keyrings_dir(self) -> str:
        return str(self._section("repository").get("keyrings_dir") or PATHS.keyrings_dir)

    @property
    def keyring(self) -> str:
        return str(self._section("repository").get("keyring") or PATHS.keyring)

    @property
    def sources_list(self) -> str:
        return str(self._section("repository").get("sources_list") or PATHS.sources_list)

    @property
    def channel(self) -> str:
        return str(self._section("repository").get("channel") or "stable")

    def packages(self, group: str) -> List[str]:
        pkgs = self._section("packages").get(group) or []
        if not isinstance(pkgs, list):
            raise ValueError(f"packages.{group} must be a list")
        return [str(p).strip() for p in pkgs if str(p).strip()]

    @property
    def docker_group(self) -> str:
        return str(self._section("docker").get("group") or "docker")

    @property
    def services(self) -> List[str]:
        return [str(s) for s in (self._section("docker").get("services") or [])]

    @property
    def restart_unit(self) -> str:
        return str(self._section("docker").get("restart_unit") or "docker")

    @property
    def daemon_config_path(self) -> str:
        return str(self._section("docker").get("daemon_config") or PATHS.daemon_config)

    @property
    def verify_image(self) -> str:
        return str(self._section("docker").get("verify_image") or "hello-world")


def load_config(path: Optional[str], *, dry_run: bool = False) -> ProvisionConfig:
    """Load YAML overrides on top of the built-in defaults."""

    if path is None:
        return ProvisionConfig(dry_run=dry_run)

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read the config file") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError("config file must contain a mapping/object")

    return ProvisionConfig(raw=_merge(DEFAULTS, raw), dry_run=dry_run)
