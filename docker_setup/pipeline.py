from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .state_store import is_step_completed, mark_step_completed

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str
    title: str
    # Guards run on every invocation, whatever window or resume mode is chosen.
    always_run: bool

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]


def _check_step_id(steps: Sequence[Step], step_id: Optional[str], flag: str) -> None:
    if step_id is None:
        return
    known = [s.step_id for s in steps]
    if step_id not in known:
        raise ValueError(f"{flag}: unknown step {step_id!r} (known: {', '.join(known)})")


def run_pipeline(
    *,
    state: Dict[str, Any],
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    resume: bool = False,
) -> PipelineResult:
    """Run steps in order; the first exception aborts the run."""

    _check_step_id(steps, start_at, "--start-at")
    _check_step_id(steps, stop_after, "--stop-after")
    if start_at is not None and stop_after is not None:
        order = [s.step_id for s in steps]
        if order.index(stop_after) < order.index(start_at):
            raise ValueError(f"--stop-after {stop_after!r} comes before --start-at {start_at!r}")

    ran: List[str] = []
    skipped: List[str] = []

    started = start_at is None

    for step in steps:
        if not started and step.step_id == start_at:
            started = True

        in_window = started
        if not in_window and not step.always_run:
            continue

        state.setdefault("execution", {})["current_step"] = step.step_id

        if resume and not step.always_run and is_step_completed(state, step.step_id):
            logger.info("Skipping step %s (already completed)", step.step_id)
            skipped.append(step.step_id)
        else:
            logger.info("%s...", step.title)
            logger.debug("Running step %s", step.step_id)
            state = step.run(state)
            mark_step_completed(state, step.step_id)
            ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, skipped_steps=skipped)
