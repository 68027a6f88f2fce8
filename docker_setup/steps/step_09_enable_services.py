from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..lib.systemd import systemctl_enable
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class EnableServicesStep:
    step_id = "09_enable_services"
    title = "Enabling Docker service to start on boot"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        for unit in cfg.services:
            systemctl_enable(unit, sudo=cfg.sudo, dry_run=cfg.dry_run)
        record_decision(state, "enabled_services", cfg.services)
        return state
