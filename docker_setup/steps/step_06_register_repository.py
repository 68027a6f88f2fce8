from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..errors import DependencyInstallFailure
from ..lib.apt_repo import render_sources_line, write_sources_list
from ..lib.osinfo import dpkg_architecture, read_os_release
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class RegisterRepositoryStep:
    step_id = "06_register_repository"
    title = "Adding Docker repository"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)

        osr = read_os_release(cfg.os_release_path)
        codename = osr.codename if osr else ""
        if not codename:
            raise DependencyInstallFailure(
                [],
                1,
                message=f"Could not determine the distribution codename from {cfg.os_release_path}",
            )
        arch = dpkg_architecture(dry_run=cfg.dry_run)

        line = render_sources_line(
            url=cfg.repo_url,
            arch=arch,
            keyring=cfg.keyring,
            codename=codename,
            channel=cfg.channel,
        )
        write_sources_list(cfg.sources_list, line, sudo=cfg.sudo, dry_run=cfg.dry_run)

        state.setdefault("environment", {})["architecture"] = arch
        record_decision(state, "repository", line.strip())
        return state
