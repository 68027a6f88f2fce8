from __future__ import annotations

from typing import Sequence

from .command import privileged, run_cmd


def systemctl_enable(unit: str, *, sudo: Sequence[str], dry_run: bool = False) -> None:
    # Only writes symlinks; the unit is not started here.
    run_cmd(privileged(sudo, ["systemctl", "enable", unit]), dry_run=dry_run)


def systemctl_restart(unit: str, *, sudo: Sequence[str], dry_run: bool = False) -> None:
    run_cmd(privileged(sudo, ["systemctl", "restart", unit]), dry_run=dry_run)
