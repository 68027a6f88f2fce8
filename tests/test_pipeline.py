from __future__ import annotations

from typing import Any, Dict, List

import pytest

from docker_setup.pipeline import run_pipeline


class Recorder:
    def __init__(self, step_id: str, log: List[str], *, always_run: bool = False, fail: bool = False) -> None:
        self.step_id = step_id
        self.title = f"Step {step_id}"
        self.always_run = always_run
        self.log = log
        self.fail = fail

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        self.log.append(self.step_id)
        if self.fail:
            raise RuntimeError(f"{self.step_id} failed")
        return state


def _steps(log: List[str], fail: str | None = None):
    return [
        Recorder("01_guard", log, always_run=True),
        Recorder("02_a", log, fail=fail == "02_a"),
        Recorder("03_b", log, fail=fail == "03_b"),
        Recorder("04_c", log, fail=fail == "04_c"),
    ]


def test_runs_all_steps_in_order() -> None:
    log: List[str] = []
    result = run_pipeline(state={}, steps=_steps(log))

    assert log == ["01_guard", "02_a", "03_b", "04_c"]
    assert result.ran_steps == log
    assert result.skipped_steps == []
    assert result.state["execution"]["completed_steps"] == log
    assert result.state["execution"]["current_step"] is None


def test_first_failure_stops_the_run() -> None:
    log: List[str] = []
    state: Dict[str, Any] = {}

    with pytest.raises(RuntimeError, match="03_b failed"):
        run_pipeline(state=state, steps=_steps(log, fail="03_b"))

    assert log == ["01_guard", "02_a", "03_b"]
    assert state["execution"]["current_step"] == "03_b"
    assert state["execution"]["completed_steps"] == ["01_guard", "02_a"]


def test_completed_steps_rerun_without_resume() -> None:
    log: List[str] = []
    state = {"execution": {"completed_steps": ["01_guard", "02_a"]}}

    result = run_pipeline(state=state, steps=_steps(log))

    assert result.ran_steps == ["01_guard", "02_a", "03_b", "04_c"]


def test_resume_skips_completed_but_not_guards() -> None:
    log: List[str] = []
    state = {"execution": {"completed_steps": ["01_guard", "02_a"]}}

    result = run_pipeline(state=state, steps=_steps(log), resume=True)

    assert log == ["01_guard", "03_b", "04_c"]
    assert result.skipped_steps == ["02_a"]


def test_window_keeps_guards() -> None:
    log: List[str] = []

    result = run_pipeline(state={}, steps=_steps(log), start_at="03_b", stop_after="03_b")

    assert log == ["01_guard", "03_b"]
    assert result.ran_steps == ["01_guard", "03_b"]


@pytest.mark.parametrize("kwargs", [{"start_at": "99_x"}, {"stop_after": "99_x"}])
def test_unknown_step_id_rejected(kwargs) -> None:
    log: List[str] = []
    with pytest.raises(ValueError, match="unknown step '99_x'"):
        run_pipeline(state={}, steps=_steps(log), **kwargs)
    assert log == []


def test_stop_after_before_start_at_rejected() -> None:
    log: List[str] = []
    with pytest.raises(ValueError, match="comes before"):
        run_pipeline(state={}, steps=_steps(log), start_at="04_c", stop_after="02_a")
    assert log == []
