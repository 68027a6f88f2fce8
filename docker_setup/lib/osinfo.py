from __future__ import annotations

import logging
import os
import shlex
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DependencyInstallFailure
from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OsRelease:
    id: str = ""
    version_id: str = ""
    version_codename: str = ""
    ubuntu_codename: str = ""
    pretty_name: str = ""

    @property
    def codename(self) -> str:
        return self.ubuntu_codename or self.version_codename

    def matches(self, expected_id: str, expected_version: str) -> bool:
        return self.id.lower() == expected_id.lower() and self.version_id == expected_version

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release(5) KEY=value lines (shell-style quoting)."""

    fields: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value.strip("\"'")]
        fields[key.strip()] = parts[0] if parts else ""
    return fields


def read_os_release(path: str) -> Optional[OsRelease]:
    p = Path(path)
    if not p.exists():
        logger.warning("os-release not found at %s", path)
        return None
    f = parse_os_release(p.read_text(encoding="utf-8", errors="ignore"))
    return OsRelease(
        id=f.get("ID", ""),
        version_id=f.get("VERSION_ID", ""),
        version_codename=f.get("VERSION_CODENAME", ""),
        ubuntu_codename=f.get("UBUNTU_CODENAME", ""),
        pretty_name=f.get("PRETTY_NAME", ""),
    )


def effective_uid() -> int:
    return os.geteuid()


def invoking_user() -> Optional[str]:
    return os.environ.get("USER") or None


def dpkg_architecture(*, dry_run: bool = False) -> str:
    r = run_cmd(["dpkg", "--print-architecture"], dry_run=dry_run)
    arch = r.stdout.strip()
    if arch:
        return arch
    if dry_run:
        # Nothing was executed; keep the planned sources line readable.
        return "amd64"
    raise DependencyInstallFailure(r.argv, 1, message="dpkg --print-architecture returned no architecture")
