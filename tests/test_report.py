from __future__ import annotations

import json

import pytest

from desktop_bootstrap.pipeline import Outcome, run_pipeline
from desktop_bootstrap.report import format_report, report_to_dict
from desktop_bootstrap.report_store import load_report, save_report


@pytest.fixture
def halted_report(machine, clock):
    steps = [
        machine.step("Ensure Nix is available"),
        machine.step("Home Manager", present=True),
        machine.step("Brave Browser", fails=True, critical=True),
        machine.step("Discord"),
    ]
    return run_pipeline(steps, clock=clock)


def test_format_report_one_line_per_step(halted_report):
    text = format_report(halted_report)
    lines = text.splitlines()

    assert lines[0].startswith("1/4  Ensure Nix is available")
    assert "completed" in lines[0] and lines[0].endswith("1.5s")
    assert "skipped" in lines[1] and lines[1].rstrip().endswith("-")
    assert "failed" in lines[2]
    assert lines[3].strip().startswith("error:")
    assert "Brave Browser installer failed" in lines[3]
    assert "not attempted" in lines[4]
    assert lines[-1] == (
        "Summary: 1 skipped, 1 completed, 1 failed, 1 not attempted "
        "(halted by critical step: Brave Browser)"
    )


def test_format_report_is_pure(halted_report):
    assert format_report(halted_report) == format_report(halted_report)


def test_format_report_marks_dry_run(machine):
    report = run_pipeline([machine.step("nix")], dry_run=True)
    assert format_report(report).splitlines()[-1] == "Summary: 1 planned (dry run)"


def test_report_to_dict(halted_report):
    data = report_to_dict(halted_report)

    assert data["ok"] is False
    assert data["halted_by"] == "Brave Browser"
    assert [s["outcome"] for s in data["steps"]] == [
        Outcome.COMPLETED.value,
        Outcome.SKIPPED.value,
        Outcome.FAILED.value,
        Outcome.NOT_ATTEMPTED.value,
    ]
    assert data["steps"][0]["elapsed_s"] == 1.5
    assert "elapsed_s" not in data["steps"][1]
    assert data["steps"][2]["error"]["type"] == "ActionError"
    assert data["counts"]["failed"] == 1
    json.dumps(data)


def test_save_report_json(tmp_path, halted_report):
    path = tmp_path / "out" / "last-run.json"
    save_report(str(path), halted_report)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["halted_by"] == "Brave Browser"
    assert load_report(str(path)) == data


def test_save_report_yaml(tmp_path, halted_report):
    path = tmp_path / "last-run.yaml"
    save_report(str(path), halted_report)

    data = load_report(str(path))
    assert data["steps"][1]["outcome"] == "skipped"


def test_load_missing_report_is_empty(tmp_path):
    assert load_report(str(tmp_path / "nope.json")) == {}


def test_load_report_rejects_non_mapping(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_report(str(p))
