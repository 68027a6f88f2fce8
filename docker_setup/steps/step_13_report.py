from __future__ import annotations

import logging
import sys
from typing import Any, Dict, List, TextIO

from ..config import ProvisionConfig
from ..errors import CommandError
from ..lib.command import privileged, run_cmd
from ..lib.daemon_config import LOG_MAX_FILE, LOG_MAX_SIZE
from ..state_store import record_warning

logger = logging.getLogger(__name__)

RULE = "=" * 63


def _version(argv: List[str], *, dry_run: bool) -> str | None:
    # A failing version command means a broken install; let it abort the run.
    r = run_cmd(argv, dry_run=dry_run)
    return r.stdout.strip() or None


def firewall_active(*, sudo: List[str], dry_run: bool) -> bool:
    """True if ``ufw status`` reports an active firewall. Never raises."""

    try:
        r = run_cmd(privileged(sudo, ["ufw", "status"]), check=False, dry_run=dry_run)
    except CommandError:
        return False
    if dry_run:
        return True
    return r.ok and "Status: active" in r.stdout


def closing_summary(group: str) -> str:
    size_mb = LOG_MAX_SIZE.rstrip("m")
    lines = [
        "",
        "Quick verification commands:",
        "  - docker --version",
        "  - docker compose version",
        "  - docker run --rm hello-world",
        "",
        "Best practices applied:",
        f"   Log rotation configured ({size_mb}MB max size, {LOG_MAX_FILE} files)",
        "   Live restore disabled (containers stop with the daemon)",
        "   Overlay2 storage driver (recommended)",
        "   Userland proxy disabled (better performance)",
        "   Docker Compose V2 installed as plugin",
        "   BuildKit support enabled",
        "",
        "Security recommendations:",
        "  - Keep Docker updated: sudo apt-get update && sudo apt-get upgrade docker-ce",
        "  - Use Docker Content Trust for image verification",
        "  - Regularly audit running containers: docker ps",
        "  - Scan images for vulnerabilities: docker scan <image>",
        "  - Use non-root users in containers when possible",
        "",
        f"Log out and back in (or run: newgrp {group}) for group changes to take effect.",
        "",
    ]
    return "\n".join(lines)


class ReportStep:
    step_id = "13_report"
    title = "Reporting installation"
    always_run = False

    def __init__(self, out: TextIO | None = None) -> None:
        self.out = out

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ProvisionConfig.from_state(state)
        out = self.out or sys.stdout

        docker_version = _version(["docker", "--version"], dry_run=cfg.dry_run)
        compose_version = _version(["docker", "compose", "version"], dry_run=cfg.dry_run)
        logger.info("Installed versions:")
        out.write(f"{docker_version or 'docker: unknown'}\n")
        out.write(f"{compose_version or 'docker compose: unknown'}\n")

        report = state.setdefault("report", {})
        report["docker_version"] = docker_version
        report["compose_version"] = compose_version

        active = firewall_active(sudo=cfg.sudo, dry_run=cfg.dry_run)
        report["firewall_active"] = active
        if not active:
            logger.warning("UFW firewall is not active. Consider enabling it for better security.")
            record_warning(state, {"step": self.step_id, "reason": "firewall_inactive"})

        logger.info("Log rotation is configured via daemon.json (max-size: %s, max-file: %s)", LOG_MAX_SIZE, LOG_MAX_FILE)
        logger.info("To enable Docker Content Trust, add 'export DOCKER_CONTENT_TRUST=1' to your ~/.bashrc")

        logger.info("%s INSTALLATION COMPLETE %s", "=" * 20, "=" * 20)
        logger.warning("IMPORTANT: You need to log out and log back in for group changes to take effect!")
        logger.warning("Alternatively, run: newgrp %s", cfg.docker_group)
        out.write(closing_summary(cfg.docker_group))
        out.write(RULE + "\n")
        out.flush()
        return state
