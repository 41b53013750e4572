from __future__ import annotations

import hashlib
import logging
import os
import re
from pathlib import Path

from .env import Paths

logger = logging.getLogger(__name__)

_STATE_VERSION_RE = re.compile(r'home\.stateVersion\s*=\s*"([0-9]+\.[0-9]+)"\s*;')


def activate_nix_profile(paths: Paths) -> list[str]:
    """Prepend existing Nix profile bin dirs to PATH for this process.

    The Python equivalent of sourcing nix-daemon.sh. Returns the dirs added.
    """

    current = os.environ.get("PATH", "").split(os.pathsep)
    added: list[str] = []
    for d in paths.nix_bin_dirs:
        s = str(d)
        if d.is_dir() and s not in current:
            added.append(s)
    if added:
        os.environ["PATH"] = os.pathsep.join(added + current)
        logger.info("Added Nix profile dirs to PATH: %s", ", ".join(added))
    return added


def prepend_path(directory: Path) -> None:
    current = os.environ.get("PATH", "").split(os.pathsep)
    if str(directory) not in current:
        os.environ["PATH"] = os.pathsep.join([str(directory)] + current)


def extract_state_version(text: str) -> str | None:
    m = _STATE_VERSION_RE.search(text)
    return m.group(1) if m else None


def render_home_nix(template: str, state_version: str) -> str:
    """Pin home.stateVersion so an upstream bump never migrates local state."""

    return re.sub(
        r'home\.stateVersion\s*=\s*".*?"\s*;',
        f'home.stateVersion = "{state_version}";',
        template,
    )


def file_digest(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()
