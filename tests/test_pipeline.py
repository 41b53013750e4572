from __future__ import annotations

import threading

import pytest

from desktop_bootstrap.errors import ActionError, CheckError, PreconditionError
from desktop_bootstrap.lib.command import CommandError
from desktop_bootstrap.pipeline import Outcome, Step, run_pipeline


def _outcomes(report):
    return [(r.name, r.outcome) for r in report.results]


def test_empty_step_list_is_a_precondition_error():
    with pytest.raises(PreconditionError):
        run_pipeline([])


def test_second_run_skips_what_first_run_completed(machine, clock):
    steps = [machine.step("nix"), machine.step("hm"), machine.step("brave")]

    first = run_pipeline(steps, clock=clock)
    assert [r.outcome for r in first.results] == [Outcome.COMPLETED] * 3

    second = run_pipeline(steps, clock=clock)
    assert [r.outcome for r in second.results] == [Outcome.SKIPPED] * 3
    assert machine.calls.count("action:nix") == 1


def test_presence_check_runs_on_every_invocation(machine):
    steps = [machine.step("nix", present=True)]
    run_pipeline(steps)
    run_pipeline(steps)
    assert machine.calls == ["check:nix", "check:nix"]


def test_report_order_matches_input_order(machine):
    steps = [
        machine.step("a", fails=True),
        machine.step("b", present=True),
        machine.step("c"),
        machine.step("d", fails=True),
    ]
    report = run_pipeline(steps)
    assert [r.name for r in report.results] == ["a", "b", "c", "d"]
    assert [r.ordinal for r in report.results] == [1, 2, 3, 4]
    assert all(r.total == 4 for r in report.results)


def test_critical_failure_halts_and_marks_rest_not_attempted(machine):
    steps = [
        machine.step("a", fails=True),
        machine.step("b", fails=True, critical=True),
        machine.step("c"),
    ]
    report = run_pipeline(steps)

    assert _outcomes(report) == [
        ("a", Outcome.FAILED),
        ("b", Outcome.FAILED),
        ("c", Outcome.NOT_ATTEMPTED),
    ]
    assert report.halted_by == "b"
    assert "check:c" not in machine.calls
    assert "action:c" not in machine.calls


def test_non_critical_failure_continues(machine):
    report = run_pipeline([machine.step("a", fails=True), machine.step("b")])
    assert _outcomes(report) == [("a", Outcome.FAILED), ("b", Outcome.COMPLETED)]
    assert report.halted_by is None
    assert not report.ok


def test_skipped_step_has_no_duration(machine, clock):
    report = run_pipeline([machine.step("hm", present=True), machine.step("nix")], clock=clock)
    skipped, completed = report.results
    assert skipped.elapsed is None
    assert completed.elapsed == pytest.approx(1.5)


def test_failed_action_is_timed(machine, clock):
    report = run_pipeline([machine.step("brave", fails=True)], clock=clock)
    assert report.results[0].elapsed == pytest.approx(1.5)


def test_end_to_end_scenario(machine):
    steps = [
        machine.step("nix"),
        machine.step("hm", present=True),
        machine.step("brave", fails=True, critical=True),
        machine.step("discord"),
    ]
    report = run_pipeline(steps)
    assert _outcomes(report) == [
        ("nix", Outcome.COMPLETED),
        ("hm", Outcome.SKIPPED),
        ("brave", Outcome.FAILED),
        ("discord", Outcome.NOT_ATTEMPTED),
    ]
    assert report.halted_by == "brave"
    assert "action:discord" not in machine.calls


def test_raising_presence_check_is_a_check_error():
    def check():
        raise PermissionError("denied: /nix")

    calls = []
    steps = [
        Step(name="nix", presence_check=check, action=lambda: calls.append("nix")),
        Step(name="hm", presence_check=lambda: False, action=lambda: calls.append("hm")),
    ]
    report = run_pipeline(steps)

    first = report.results[0]
    assert first.outcome is Outcome.FAILED
    assert isinstance(first.error, CheckError)
    assert first.elapsed is None
    assert "denied: /nix" in first.error_detail
    assert calls == ["hm"]


def test_raising_presence_check_on_critical_step_halts():
    def check():
        raise OSError("boom")

    steps = [
        Step(name="nix", presence_check=check, action=lambda: None, critical=True),
        Step(name="hm", presence_check=lambda: False, action=lambda: None),
    ]
    report = run_pipeline(steps)
    assert [r.outcome for r in report.results] == [Outcome.FAILED, Outcome.NOT_ATTEMPTED]
    assert report.halted_by == "nix"


def test_action_returning_false_is_a_failure():
    report = run_pipeline([Step(name="x", presence_check=lambda: False, action=lambda: False)])
    result = report.results[0]
    assert result.outcome is Outcome.FAILED
    assert isinstance(result.error, ActionError)
    assert result.error.step == "x"


def test_command_failure_keeps_exit_status():
    def action():
        raise CommandError(["apt-get", "install", "x"], 100, "E: Unable to locate package x")

    report = run_pipeline([Step(name="x", presence_check=lambda: False, action=action)])
    err = report.results[0].error
    assert isinstance(err, ActionError)
    assert err.returncode == 100
    assert "Unable to locate package" in str(err)
    assert isinstance(err.__cause__, CommandError)


def test_keyboard_interrupt_is_not_swallowed():
    def action():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        run_pipeline([Step(name="x", presence_check=lambda: False, action=action)])


def test_dry_run_never_calls_actions(machine):
    steps = [machine.step("nix"), machine.step("hm", present=True)]
    report = run_pipeline(steps, dry_run=True)

    assert _outcomes(report) == [("nix", Outcome.PLANNED), ("hm", Outcome.SKIPPED)]
    assert report.dry_run
    assert not any(c.startswith("action:") for c in machine.calls)


def test_from_step_and_stop_after(machine):
    steps = [machine.step(n) for n in ("a", "b", "c", "d")]
    report = run_pipeline(steps, from_step=2, stop_after=3)

    assert [r.outcome for r in report.results] == [
        Outcome.NOT_ATTEMPTED,
        Outcome.COMPLETED,
        Outcome.COMPLETED,
        Outcome.NOT_ATTEMPTED,
    ]
    assert machine.calls == ["check:b", "action:b", "check:c", "action:c"]


@pytest.mark.parametrize("kwargs", [{"from_step": 0}, {"stop_after": 5}, {"from_step": 3, "stop_after": 2}])
def test_bad_ordinals_are_precondition_errors(machine, kwargs):
    steps = [machine.step(n) for n in ("a", "b", "c")]
    with pytest.raises(PreconditionError):
        run_pipeline(steps, **kwargs)
    assert machine.calls == []


def test_cancel_is_checked_between_steps(machine):
    cancel = threading.Event()
    a = machine.step("a")

    def action_then_cancel():
        a.action()
        cancel.set()

    steps = [
        Step(name="a", presence_check=a.presence_check, action=action_then_cancel),
        machine.step("b"),
        machine.step("c"),
    ]
    report = run_pipeline(steps, cancel=cancel)

    assert [r.outcome for r in report.results] == [
        Outcome.COMPLETED,
        Outcome.NOT_ATTEMPTED,
        Outcome.NOT_ATTEMPTED,
    ]
    assert report.cancelled
    assert report.halted_by is None


def test_report_is_immutable(machine):
    report = run_pipeline([machine.step("a")])
    with pytest.raises(AttributeError):
        report.halted_by = "x"
    assert isinstance(report.results, tuple)


def test_counts(machine):
    report = run_pipeline(
        [machine.step("a"), machine.step("b", present=True), machine.step("c", fails=True)]
    )
    counts = report.counts()
    assert counts[Outcome.COMPLETED] == 1
    assert counts[Outcome.SKIPPED] == 1
    assert counts[Outcome.FAILED] == 1
    assert counts[Outcome.NOT_ATTEMPTED] == 0
