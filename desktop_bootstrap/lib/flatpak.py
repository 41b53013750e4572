from __future__ import annotations

import logging

from .command import have, run_cmd

logger = logging.getLogger(__name__)


def flatpak_installed_apps() -> set[str]:
    """Application ids installed for any installation. Empty if flatpak is missing."""

    if not have("flatpak"):
        return set()
    r = run_cmd(["flatpak", "list", "--app", "--columns=application"])
    return {line.strip() for line in r.stdout.splitlines() if line.strip()}


def flatpak_add_remote(name: str, url: str) -> None:
    run_cmd(["sudo", "flatpak", "remote-add", "--if-not-exists", name, url])


def flatpak_install(remote: str, app_id: str) -> None:
    run_cmd(["flatpak", "-y", "--noninteractive", "install", remote, app_id])
