from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..lib.apt import apt_remove_best_effort
from ..state_store import record_warning

logger = logging.getLogger(__name__)


class RemoveLegacyPackagesStep:
    step_id = "04_remove_legacy"
    title = "Removing old Docker versions (if any)"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        legacy = cfg.packages("legacy")
        if not apt_remove_best_effort(legacy, sudo=cfg.sudo, dry_run=cfg.dry_run):
            record_warning(state, {"step": self.step_id, "reason": "legacy_removal_failed", "packages": legacy})
        return state
