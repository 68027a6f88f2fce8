from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..lib.daemon_config import write_daemon_config

logger = logging.getLogger(__name__)


class WriteDaemonConfigStep:
    step_id = "10_write_daemon_config"
    title = "Configuring Docker daemon"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        text = write_daemon_config(cfg.daemon_config_path, sudo=cfg.sudo, dry_run=cfg.dry_run)
        state.setdefault("execution", {}).setdefault("decisions", {})["daemon_config"] = {
            "path": cfg.daemon_config_path,
            "sha256": hashlib.sha256(text.encode("utf-8")).hexdigest(),
        }
        return state
