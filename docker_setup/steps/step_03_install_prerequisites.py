from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..lib.apt import apt_install, apt_update

logger = logging.getLogger(__name__)


class InstallPrerequisitesStep:
    step_id = "03_install_prerequisites"
    title = "Updating package index and installing prerequisites"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        apt_update(sudo=cfg.sudo, dry_run=cfg.dry_run)
        apt_install(cfg.packages("prerequisites"), sudo=cfg.sudo, dry_run=cfg.dry_run)
        return state
