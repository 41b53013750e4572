from __future__ import annotations

import logging
from pathlib import Path
from typing import List

DEFAULT_LOG_PATH = "~/.local/state/desktop-bootstrap/bootstrap.log"

_MARK = "_desktop_bootstrap"


class ConsoleFormatter(logging.Formatter):
    """Plain messages for progress, a level tag for anything that needs attention."""

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {msg}"
        return f"→ {msg}"


def _open_log_file(requested: Path) -> logging.FileHandler:
    try:
        requested.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(requested, encoding="utf-8")
    except OSError:
        return logging.FileHandler(Path.cwd() / "desktop-bootstrap.log", encoding="utf-8")


def _our_handlers(root: logging.Logger) -> List[logging.Handler]:
    return [h for h in root.handlers if getattr(h, _MARK, False)]


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Send every step decision to the bootstrap log, and progress to the console.

    The file always records DEBUG (command stdout/stderr included); `level`
    only controls the console. An unwritable log location falls back to
    ./desktop-bootstrap.log. Calling this again is a no-op.

    Returns the actual file path being used.
    """

    root = logging.getLogger()
    existing = _our_handlers(root)
    if existing:
        for h in existing:
            if isinstance(h, logging.FileHandler):
                return h.baseFilename
        return log_path

    root.setLevel(logging.DEBUG)

    file_handler = _open_log_file(Path(log_path).expanduser())
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    handlers: List[logging.Handler] = [file_handler]

    if also_console:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(ConsoleFormatter())
        handlers.append(console)

    for h in handlers:
        setattr(h, _MARK, True)
        root.addHandler(h)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, file_handler.baseFilename
    )
    return file_handler.baseFilename
