from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

NONINTERACTIVE = "DEBIAN_FRONTEND=noninteractive"


def apt_update(*, quiet: bool = True) -> None:
    argv = ["sudo", "apt-get"]
    if quiet:
        argv.append("-qq")
    run_cmd([*argv, "update"])


def apt_install(packages: Sequence[str]) -> None:
    if not packages:
        return
    # sudo drops the caller's environment, so the frontend is passed as an assignment.
    run_cmd(["sudo", NONINTERACTIVE, "apt-get", "-y", "install", *packages])


def dpkg_has_package(package: str) -> bool:
    """Return True if dpkg reports the package as installed."""
    r = run_cmd(["dpkg-query", "-W", "-f=${Status}", package], check=False)
    return r.returncode == 0 and "install ok installed" in r.stdout


def add_apt_source(*, key_text: str, keyring: str, list_path: str, repo_line: str) -> None:
    run_cmd(["sudo", "gpg", "--dearmor", "--yes", "-o", keyring], input_text=key_text)
    run_cmd(["sudo", "tee", list_path], input_text=repo_line.rstrip("\n") + "\n")
    logger.info("Configured apt source %s (%s)", list_path, repo_line)
