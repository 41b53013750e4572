from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple, Union

from .errors import ActionError, CheckError, PreconditionError

logger = logging.getLogger(__name__)


class CancelToken(Protocol):
    def is_set(self) -> bool:
        ...


@dataclass(frozen=True)
class Step:
    """A single idempotent provisioning step.

    presence_check may be called on every run and must not mutate the system.
    action is only called when presence_check returned False.
    """

    name: str
    presence_check: Callable[[], bool]
    action: Callable[[], object]
    critical: bool = False
    step_id: Optional[str] = None


class Outcome(str, enum.Enum):
    SKIPPED = "skipped"
    COMPLETED = "completed"
    FAILED = "failed"
    NOT_ATTEMPTED = "not attempted"
    PLANNED = "planned"


@dataclass(frozen=True)
class StepResult:
    name: str
    ordinal: int
    total: int
    outcome: Outcome
    elapsed: Optional[float] = None
    error: Optional[Union[CheckError, ActionError]] = None
    critical: bool = False
    step_id: Optional[str] = None

    @property
    def error_detail(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


@dataclass(frozen=True)
class RunReport:
    results: Tuple[StepResult, ...]
    halted_by: Optional[str] = None
    cancelled: bool = False
    dry_run: bool = False

    @property
    def failed(self) -> Tuple[StepResult, ...]:
        return self.by_outcome(Outcome.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed and self.halted_by is None and not self.cancelled

    def by_outcome(self, outcome: Outcome) -> Tuple[StepResult, ...]:
        return tuple(r for r in self.results if r.outcome is outcome)

    def counts(self) -> Dict[Outcome, int]:
        out = {o: 0 for o in Outcome}
        for r in self.results:
            out[r.outcome] += 1
        return out


def _validate_ordinal(label: str, value: Optional[int], total: int) -> None:
    if value is None:
        return
    if not 1 <= value <= total:
        raise PreconditionError(f"{label} must be between 1 and {total}, got {value}")


def _run_action(step: Step) -> None:
    try:
        ok = step.action()
    except ActionError as e:
        if e.step is None:
            e.step = step.name
        raise
    except Exception as e:
        raise ActionError(str(e), step=step.name, returncode=getattr(e, "returncode", None)) from e
    if ok is False:
        raise ActionError("action reported failure", step=step.name)


def run_pipeline(
    steps: Sequence[Step],
    *,
    dry_run: bool = False,
    from_step: Optional[int] = None,
    stop_after: Optional[int] = None,
    cancel: Optional[CancelToken] = None,
    clock: Callable[[], float] = time.monotonic,
) -> RunReport:
    """Run steps in order with skip-if-present semantics.

    Per-step failures are captured in the report. A failed critical step marks
    every remaining step as NOT_ATTEMPTED. Only precondition violations raise.
    """

    total = len(steps)
    if total == 0:
        raise PreconditionError("No steps to run")
    _validate_ordinal("from_step", from_step, total)
    _validate_ordinal("stop_after", stop_after, total)
    if from_step is not None and stop_after is not None and from_step > stop_after:
        raise PreconditionError(f"from_step ({from_step}) is after stop_after ({stop_after})")

    results: List[StepResult] = []
    halted_by: Optional[str] = None
    cancelled = False

    def record(step: Step, ordinal: int, outcome: Outcome, **kw) -> None:
        results.append(
            StepResult(
                name=step.name,
                ordinal=ordinal,
                total=total,
                outcome=outcome,
                critical=step.critical,
                step_id=step.step_id,
                **kw,
            )
        )

    for ordinal, step in enumerate(steps, start=1):
        if halted_by is not None or cancelled:
            record(step, ordinal, Outcome.NOT_ATTEMPTED)
            continue

        if (from_step is not None and ordinal < from_step) or (
            stop_after is not None and ordinal > stop_after
        ):
            record(step, ordinal, Outcome.NOT_ATTEMPTED)
            continue

        if cancel is not None and cancel.is_set():
            logger.warning("Cancelled before step %d/%d (%s)", ordinal, total, step.name)
            cancelled = True
            record(step, ordinal, Outcome.NOT_ATTEMPTED)
            continue

        logger.info("Step %d/%d ▸ %s", ordinal, total, step.name)

        try:
            present = bool(step.presence_check())
        except Exception as e:
            err = CheckError(f"presence check failed: {e}", step=step.name)
            err.__cause__ = e
            logger.error("Presence check for %s failed: %s", step.name, e)
            record(step, ordinal, Outcome.FAILED, error=err)
            if step.critical:
                logger.error("Critical step %s failed, halting", step.name)
                halted_by = step.name
            continue

        if present:
            logger.info("%s already satisfied ✔", step.name)
            record(step, ordinal, Outcome.SKIPPED)
            continue

        if dry_run:
            logger.info("Would run %s", step.name)
            record(step, ordinal, Outcome.PLANNED)
            continue

        started = clock()
        try:
            _run_action(step)
        except ActionError as e:
            elapsed = clock() - started
            logger.error("%s failed after %.1fs: %s", step.name, elapsed, e)
            record(step, ordinal, Outcome.FAILED, elapsed=elapsed, error=e)
            if step.critical:
                logger.error("Critical step %s failed, halting", step.name)
                halted_by = step.name
            continue

        elapsed = clock() - started
        logger.info("%s done ⏱ %.1fs", step.name, elapsed)
        record(step, ordinal, Outcome.COMPLETED, elapsed=elapsed)

    return RunReport(
        results=tuple(results),
        halted_by=halted_by,
        cancelled=cancelled,
        dry_run=dry_run,
    )
