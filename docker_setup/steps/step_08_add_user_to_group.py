from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import ProvisionConfig
from ..errors import PrivilegeError
from ..lib.command import privileged, run_cmd
from ..lib.osinfo import invoking_user
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class AddUserToGroupStep:
    step_id = "08_add_user_to_group"
    title = "Adding invoking user to the docker group"
    always_run = False

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        user = invoking_user()
        if not user:
            raise PrivilegeError("USER is not set; cannot add the invoking user to the docker group")

        logger.info("Adding user '%s' to %s group...", user, cfg.docker_group)
        run_cmd(privileged(cfg.sudo, ["usermod", "-aG", cfg.docker_group, user]), dry_run=cfg.dry_run)

        # Membership only applies to new login sessions.
        record_decision(state, "group_membership", {"user": user, "group": cfg.docker_group, "relogin_required": True})
        return state
