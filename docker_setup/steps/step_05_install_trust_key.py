from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..lib.apt_repo import install_signing_key

logger = logging.getLogger(__name__)


class InstallTrustKeyStep:
    step_id = "05_install_trust_key"
    title = "Setting up Docker GPG key"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        install_signing_key(
            key_url=cfg.key_url,
            keyrings_dir=cfg.keyrings_dir,
            keyring=cfg.keyring,
            sudo=cfg.sudo,
            dry_run=cfg.dry_run,
        )
        return state
