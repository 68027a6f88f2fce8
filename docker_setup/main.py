from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List, Optional

from .config import load_config
from .errors import ProvisionError
from .lib.env import PATHS
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import Step, run_pipeline
from .state_store import ensure_defaults, load_state, reset_run, save_state
from .steps import (
    AddUserToGroupStep,
    CheckPlatformStep,
    CheckPrivilegeStep,
    EnableServicesStep,
    InstallPrerequisitesStep,
    InstallRuntimeStep,
    InstallTrustKeyStep,
    RegisterRepositoryStep,
    RemoveLegacyPackagesStep,
    ReportStep,
    RestartDaemonStep,
    VerifyRuntimeStep,
    WriteDaemonConfigStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = PATHS.state_default


def build_steps() -> List[Step]:
    return [
        CheckPrivilegeStep(),
        CheckPlatformStep(),
        InstallPrerequisitesStep(),
        RemoveLegacyPackagesStep(),
        InstallTrustKeyStep(),
        RegisterRepositoryStep(),
        InstallRuntimeStep(),
        AddUserToGroupStep(),
        EnableServicesStep(),
        WriteDaemonConfigStep(),
        RestartDaemonStep(),
        VerifyRuntimeStep(),
        ReportStep(),
    ]


def run(
    *,
    config_path: Optional[str] = None,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    resume: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Run the provisioning pipeline, persisting a run record."""

    actual_log_path = configure_logging(log_path=log_path, level=logging.DEBUG if verbose else logging.INFO)

    cfg = load_config(config_path, dry_run=dry_run)

    state = ensure_defaults(load_state(state_path))
    if not resume:
        reset_run(state)
    state["config"] = cfg.to_state()
    state.setdefault("execution", {}).setdefault("paths", {})["log_path_requested"] = log_path
    state.setdefault("execution", {}).setdefault("paths", {})["log_path_actual"] = actual_log_path

    if dry_run:
        logger.info("Dry run: commands are logged, not executed")

    try:
        result = run_pipeline(
            state=state,
            steps=build_steps(),
            start_at=start_at,
            stop_after=stop_after,
            resume=resume,
        )
        state = result.state
        state.setdefault("execution", {}).setdefault("summary", {})["ran_steps"] = result.ran_steps
        state.setdefault("execution", {}).setdefault("summary", {})["skipped_steps"] = result.skipped_steps
        return state
    except Exception as e:
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "type": type(e).__name__,
                "error": str(e),
            }
        )
        raise
    finally:
        save_state(state_path, state)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="docker-setup",
        description="Install and configure Docker Engine on Ubuntu 24.04.",
    )
    p.add_argument("--config", default=None, help="YAML file overriding paths, packages and repository")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to the run record (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the log file")
    p.add_argument("--dry-run", action="store_true", help="Log commands and writes without executing them")
    p.add_argument("--resume", action="store_true", help="Skip steps completed by a previous run")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 05_install_trust_key)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("-v", "--verbose", action="store_true", help="Log command output")

    args = p.parse_args(argv)

    known = [s.step_id for s in build_steps()]
    for flag, value in (("--start-at", args.start_at), ("--stop-after", args.stop_after)):
        if value is not None and value not in known:
            p.error(f"{flag}: unknown step {value!r} (choose from {', '.join(known)})")
    if args.start_at is not None and args.stop_after is not None:
        if known.index(args.stop_after) < known.index(args.start_at):
            p.error(f"--stop-after {args.stop_after!r} comes before --start-at {args.start_at!r}")

    try:
        run(
            config_path=args.config,
            state_path=args.state,
            log_path=args.log,
            start_at=args.start_at,
            stop_after=args.stop_after,
            resume=args.resume,
            dry_run=args.dry_run,
            verbose=args.verbose,
        )
    except ProvisionError as e:
        logger.error("%s", e)
        return e.exit_code
    return 0
