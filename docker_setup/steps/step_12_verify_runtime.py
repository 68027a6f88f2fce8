from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..errors import CommandError, VerificationFailure
from ..lib.command import privileged, run_cmd

logger = logging.getLogger(__name__)


class VerifyRuntimeStep:
    step_id = "12_verify_runtime"
    title = "Verifying Docker installation"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        # The group change is not active yet in this session, so go through sudo.
        argv = privileged(cfg.sudo, ["docker", "run", "--rm", cfg.verify_image])
        try:
            r = run_cmd(argv, check=False, dry_run=cfg.dry_run)
        except CommandError as e:
            raise VerificationFailure(f"Docker installation verification failed: {e}") from e

        state.setdefault("report", {})["verification"] = {"image": cfg.verify_image, "returncode": r.returncode}
        if not r.ok:
            raise VerificationFailure(f"Docker installation verification failed (exit {r.returncode})")

        logger.info("Docker is successfully installed and running!")
        return state
