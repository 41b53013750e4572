from __future__ import annotations

from typing import Any, Dict, List

from .pipeline import RunReport, StepResult


def _fmt_elapsed(r: StepResult) -> str:
    if r.elapsed is None:
        return "-"
    return f"{r.elapsed:.1f}s"


def format_report(report: RunReport) -> str:
    """Render a run report as a multi-line summary. Pure; no I/O."""

    width = max(len(r.name) for r in report.results) if report.results else 0
    digits = len(str(len(report.results)))

    lines: List[str] = []
    for r in report.results:
        lines.append(
            f"{r.ordinal:>{digits}}/{r.total}  {r.name:<{width}}  "
            f"{r.outcome.value:<13}  {_fmt_elapsed(r):>8}"
        )
        if r.error is not None:
            lines.append(f"{' ' * (digits * 2 + 3)}error: {r.error_detail}")

    counts = report.counts()
    parts = [f"{n} {o.value}" for o, n in counts.items() if n]
    summary = "Summary: " + ", ".join(parts)
    if report.halted_by is not None:
        summary += f" (halted by critical step: {report.halted_by})"
    if report.cancelled:
        summary += " (cancelled)"
    if report.dry_run:
        summary += " (dry run)"
    lines.append(summary)
    return "\n".join(lines)


def report_to_dict(report: RunReport) -> Dict[str, Any]:
    steps: List[Dict[str, Any]] = []
    for r in report.results:
        item: Dict[str, Any] = {
            "ordinal": r.ordinal,
            "name": r.name,
            "outcome": r.outcome.value,
            "critical": r.critical,
        }
        if r.step_id is not None:
            item["step_id"] = r.step_id
        if r.elapsed is not None:
            item["elapsed_s"] = round(r.elapsed, 3)
        if r.error is not None:
            item["error"] = {"type": type(r.error).__name__, "detail": r.error_detail}
            returncode = getattr(r.error, "returncode", None)
            if returncode is not None:
                item["error"]["returncode"] = returncode
        steps.append(item)

    return {
        "ok": report.ok,
        "dry_run": report.dry_run,
        "cancelled": report.cancelled,
        "halted_by": report.halted_by,
        "counts": {o.value: n for o, n in report.counts().items()},
        "steps": steps,
    }
