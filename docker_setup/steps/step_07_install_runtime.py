from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..lib.apt import apt_install, apt_update

logger = logging.getLogger(__name__)


class InstallRuntimeStep:
    step_id = "07_install_runtime"
    title = "Installing Docker Engine, containerd, and Docker Compose"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        logger.info("Updating package index with Docker repository...")
        apt_update(sudo=cfg.sudo, dry_run=cfg.dry_run)
        packages = cfg.packages("runtime")
        apt_install(packages, sudo=cfg.sudo, dry_run=cfg.dry_run)
        logger.info("Installed %s", " ".join(packages))
        return state
