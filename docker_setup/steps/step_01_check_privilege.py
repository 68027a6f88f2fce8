from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import PrivilegeError
from ..lib.osinfo import effective_uid, invoking_user

logger = logging.getLogger(__name__)


class CheckPrivilegeStep:
    step_id = "01_check_privilege"
    title = "Checking invocation privileges"
    always_run = True

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        uid = effective_uid()
        env = state.setdefault("environment", {})
        env["euid"] = uid
        env["user"] = invoking_user()

        if uid == 0:
            raise PrivilegeError(
                "This script should not be run as root. Run as a regular user with sudo privileges."
            )
        return state
