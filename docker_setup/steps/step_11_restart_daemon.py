from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..lib.systemd import systemctl_restart

logger = logging.getLogger(__name__)


class RestartDaemonStep:
    step_id = "11_restart_daemon"
    title = "Restarting Docker service"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        systemctl_restart(cfg.restart_unit, sudo=cfg.sudo, dry_run=cfg.dry_run)
        return state
