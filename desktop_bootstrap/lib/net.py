from __future__ import annotations

import logging
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)


def fetch_text(url: str) -> str:
    """Fetch a URL body as text (installer scripts, config files)."""

    r = run_cmd(["curl", "--proto", "=https", "--tlsv1.2", "-fsSL", url])
    return r.stdout


def download(url: str, dest_dir: str) -> list[Path]:
    """Download into dest_dir honouring the server's filename.

    Returns the files present in dest_dir afterwards.
    """

    d = Path(dest_dir)
    d.mkdir(parents=True, exist_ok=True)
    run_cmd(["wget", "-q", "--content-disposition", url], cwd=str(d))
    files = sorted(p for p in d.iterdir() if p.is_file())
    logger.info("Downloaded %s -> %s", url, ", ".join(p.name for p in files) or "(nothing)")
    return files
