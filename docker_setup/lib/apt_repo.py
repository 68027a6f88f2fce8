from __future__ import annotations

import logging
import os
import tempfile
from typing import Sequence

from ..errors import CommandError, DependencyInstallFailure
from .command import privileged, run_cmd
from .files import ensure_dir, write_file

logger = logging.getLogger(__name__)


def install_signing_key(
    *,
    key_url: str,
    keyrings_dir: str,
    keyring: str,
    sudo: Sequence[str],
    dry_run: bool = False,
) -> None:
    """Fetch an ASCII-armored key and install it as a binary keyring.

    Equivalent of ``curl -fsSL URL | gpg --dearmor -o KEYRING`` with the
    download staged in a temp file so gpg never reads a half-written pipe.
    """

    fd, tmp = tempfile.mkstemp(prefix="docker-setup-", suffix=".asc")
    os.close(fd)
    try:
        ensure_dir(keyrings_dir, sudo=sudo, mode="0755", dry_run=dry_run)
        run_cmd(["curl", "-fsSL", key_url, "-o", tmp], dry_run=dry_run)
        run_cmd(privileged(sudo, ["gpg", "--batch", "--yes", "--dearmor", "-o", keyring, tmp]), dry_run=dry_run)
        run_cmd(privileged(sudo, ["chmod", "a+r", keyring]), dry_run=dry_run)
    except CommandError as e:
        raise DependencyInstallFailure.from_command(e, f"Installing signing key from {key_url} failed") from e
    finally:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass

    logger.info("Installed signing key %s", keyring)


def render_sources_line(*, url: str, arch: str, keyring: str, codename: str, channel: str = "stable") -> str:
    return f"deb [arch={arch} signed-by={keyring}] {url} {codename} {channel}\n"


def write_sources_list(path: str, line: str, *, sudo: Sequence[str], dry_run: bool = False) -> None:
    try:
        write_file(path, line, sudo=sudo, dry_run=dry_run)
    except CommandError as e:
        raise DependencyInstallFailure.from_command(e, f"Writing {path} failed") from e
    logger.info("Configured apt repository: %s", line.strip())
