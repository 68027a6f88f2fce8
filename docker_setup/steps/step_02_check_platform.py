from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..errors import PlatformMismatch
from ..lib.osinfo import read_os_release
from ..lib.prompt import confirm
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class CheckPlatformStep:
    step_id = "02_check_platform"
    title = "Checking platform"
    always_run = True

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        expected = f"{cfg.expected_os_id} {cfg.expected_os_version}"

        osr = read_os_release(cfg.os_release_path)
        state.setdefault("environment", {})["os_release"] = osr.as_dict() if osr else None

        if osr is not None and osr.matches(cfg.expected_os_id, cfg.expected_os_version):
            record_decision(state, "platform_supported", True)
            logger.info("Starting Docker installation for %s...", osr.pretty_name or expected)
            return state

        record_decision(state, "platform_supported", False)
        found = (osr.pretty_name or f"{osr.id} {osr.version_id}") if osr else "unknown"
        logger.warning(
            "This script is designed for %s (found: %s). Your system may not be compatible.",
            expected,
            found,
        )
        if not confirm("Continue anyway?"):
            record_decision(state, "platform_override", False)
            raise PlatformMismatch(f"Unsupported platform {found!r}; expected {expected}")

        record_decision(state, "platform_override", True)
        logger.warning("Continuing on unsupported platform %s at user request", found)
        return state
