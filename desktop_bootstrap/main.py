from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from typing import List, Optional

from .config import DEFAULT_CONFIG_PATH, BootstrapConfig, load_config
from .context import BootstrapCtx
from .errors import PreconditionError
from .lib.env import user_paths
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import CancelToken, RunReport, Step, run_pipeline
from .preflight import check_not_root, ensure_sudo
from .report import format_report
from .report_store import save_report
from .steps import (
    BraveStep,
    DiscordStep,
    FlatpakAppsStep,
    FlatpakStep,
    HomeManagerStep,
    HomeManagerSwitchStep,
    HomeNixStep,
    NixStep,
    SpicetifyStep,
    SpotifyStep,
    VencordStep,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CRITICAL_FAILURE = 1
EXIT_PRECONDITION = 2
EXIT_STEP_FAILURES = 3
EXIT_CANCELLED = 130

STEP_CLASSES = [
    NixStep,
    HomeManagerStep,
    HomeNixStep,
    HomeManagerSwitchStep,
    SpotifyStep,
    FlatpakStep,
    BraveStep,
    DiscordStep,
    VencordStep,
    SpicetifyStep,
    FlatpakAppsStep,
]


def build_steps(ctx: BootstrapCtx) -> List[Step]:
    cfg = ctx.config
    steps: List[Step] = []
    for cls in STEP_CLASSES:
        if not cfg.is_enabled(cls.step_id):
            logger.info("Step %s disabled by config", cls.step_id)
            continue
        impl = cls(ctx)
        steps.append(
            Step(
                name=impl.name,
                presence_check=impl.is_present,
                action=impl.run,
                critical=cfg.is_critical(cls.step_id, cls.critical),
                step_id=cls.step_id,
            )
        )
    return steps


def exit_code_for(report: RunReport, *, interrupted: bool = False) -> int:
    """Map a report to the process exit code.

    A signal that arrives mid-step kills the running installer too, so that
    step fails. interrupted=True reports such a run as cancelled even when the
    failed step was critical.
    """

    if report.cancelled or interrupted:
        return EXIT_CANCELLED
    if report.halted_by is not None:
        return EXIT_CRITICAL_FAILURE
    if report.failed:
        return EXIT_STEP_FAILURES
    return EXIT_OK


def run(
    *,
    config: Optional[BootstrapConfig] = None,
    dry_run: bool = False,
    from_step: Optional[int] = None,
    stop_after: Optional[int] = None,
    cancel: Optional[CancelToken] = None,
) -> RunReport:
    """Run preflight checks and the bootstrap sequence.

    Raises PreconditionError before any step runs if the environment is unfit.
    """

    check_not_root()
    if not dry_run:
        ensure_sudo()

    ctx = BootstrapCtx(config=config or BootstrapConfig(), paths=user_paths())
    steps = build_steps(ctx)

    return run_pipeline(
        steps,
        dry_run=dry_run,
        from_step=from_step,
        stop_after=stop_after,
        cancel=cancel,
    )


def _install_cancel_handlers(cancel: threading.Event) -> None:
    def _handler(signum, _frame):
        logger.warning("Received %s, stopping after the current step", signal.Signals(signum).name)
        cancel.set()

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="desktop-bootstrap")
    p.add_argument("--config", default=None, help=f"YAML config (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to bootstrap log")
    p.add_argument("--report", default=None, help="Write the run report here (json|yaml)")
    p.add_argument("--dry-run", action="store_true", help="Only run presence checks")
    p.add_argument("--from-step", type=int, default=None, help="Start at step N (1-indexed)")
    p.add_argument("--stop-after", type=int, default=None, help="Stop after step N")
    p.add_argument("--list-steps", action="store_true", help="Print the step list and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Log command output")

    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        cfg = load_config(args.config, required=args.config is not None)
    except PreconditionError as e:
        logger.error("%s", e)
        return EXIT_PRECONDITION

    if args.list_steps:
        steps = build_steps(BootstrapCtx(config=cfg, paths=user_paths()))
        for i, s in enumerate(steps, start=1):
            flag = " (critical)" if s.critical else ""
            print(f"{i:>2}. {s.step_id}  {s.name}{flag}")
        return EXIT_OK

    cancel = threading.Event()
    _install_cancel_handlers(cancel)

    try:
        report = run(
            config=cfg,
            dry_run=bool(args.dry_run),
            from_step=args.from_step,
            stop_after=args.stop_after,
            cancel=cancel,
        )
    except PreconditionError as e:
        logger.error("❌ %s", e)
        return EXIT_PRECONDITION

    sys.stdout.write(format_report(report) + "\n")
    code = exit_code_for(report, interrupted=cancel.is_set())

    if args.report:
        try:
            save_report(args.report, report)
        except OSError as e:
            logger.error("Could not write run report to %s: %s", args.report, e)

    if code == EXIT_OK and not report.dry_run:
        logger.info("🎉 All tasks completed successfully!")
    return code


if __name__ == "__main__":
    raise SystemExit(main())
