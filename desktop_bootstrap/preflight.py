from __future__ import annotations

import logging
import os

from .errors import PreconditionError
from .lib.command import CommandError, run_cmd

logger = logging.getLogger(__name__)


def check_not_root() -> None:
    """Installs land in the user's home (Nix profile, Home Manager); never run as root."""

    if os.geteuid() == 0:
        raise PreconditionError(
            "Please run as your normal user, not as root or with sudo."
        )


def ensure_sudo() -> None:
    """Ask for sudo once up front so later steps don't stall mid-run."""

    try:
        run_cmd(["sudo", "-v"])
    except CommandError as e:
        raise PreconditionError("Need sudo privileges to continue.") from e
    logger.info("sudo credentials cached")
