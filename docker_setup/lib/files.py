from __future__ import annotations

import logging
from typing import Sequence

from .command import privileged, run_cmd

logger = logging.getLogger(__name__)


def ensure_dir(path: str, *, sudo: Sequence[str], mode: str | None = None, dry_run: bool = False) -> None:
    if mode:
        run_cmd(privileged(sudo, ["install", "-m", mode, "-d", path]), dry_run=dry_run)
    else:
        run_cmd(privileged(sudo, ["mkdir", "-p", path]), dry_run=dry_run)


def write_file(path: str, contents: str, *, sudo: Sequence[str], dry_run: bool = False) -> None:
    """Overwrite a root-owned file by piping contents through ``sudo tee``."""

    if dry_run:
        logger.info("Would write %s", path)
    run_cmd(privileged(sudo, ["tee", path]), input_text=contents, dry_run=dry_run)
    logger.debug("Wrote %d bytes to %s", len(contents.encode("utf-8")), path)
