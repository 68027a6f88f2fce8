from __future__ import annotations

import logging
from typing import Sequence

from ..errors import CommandError, DependencyInstallFailure
from .command import privileged, run_cmd

logger = logging.getLogger(__name__)


def apt_update(*, sudo: Sequence[str], dry_run: bool = False) -> None:
    try:
        run_cmd(privileged(sudo, ["apt-get", "update"]), dry_run=dry_run)
    except CommandError as e:
        raise DependencyInstallFailure.from_command(e, "Package index refresh failed") from e


def apt_install(packages: Sequence[str], *, sudo: Sequence[str], dry_run: bool = False) -> None:
    if not packages:
        return
    try:
        run_cmd(privileged(sudo, ["apt-get", "install", "-y", *packages]), dry_run=dry_run)
    except CommandError as e:
        raise DependencyInstallFailure.from_command(e, f"Installing {', '.join(packages)} failed") from e


def apt_remove_best_effort(packages: Sequence[str], *, sudo: Sequence[str], dry_run: bool = False) -> bool:
    """Remove packages, ignoring failure.

    Returns True if apt-get reported success. Absence of the packages is the
    common case, so a non-zero exit is only logged.
    """

    if not packages:
        return True
    try:
        r = run_cmd(
            privileged(sudo, ["apt-get", "remove", "-y", *packages]),
            check=False,
            dry_run=dry_run,
        )
    except CommandError as e:
        logger.info("Non-fatal: legacy package removal could not run (%s)", e)
        return False
    if r.returncode != 0:
        logger.info("Non-fatal: legacy package removal exited %s (packages likely absent)", r.returncode)
        return False
    return True
