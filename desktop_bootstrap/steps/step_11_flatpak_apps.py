from __future__ import annotations

import logging

from ..context import BootstrapCtx
from ..lib.flatpak import flatpak_install, flatpak_installed_apps

logger = logging.getLogger(__name__)


class FlatpakAppsStep:
    step_id = "11_flatpak_apps"
    name = "Flatpak GUI apps"
    critical = False

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def missing_apps(self) -> list[str]:
        installed = flatpak_installed_apps()
        return [a for a in self.ctx.config.flatpak_apps if a not in installed]

    def is_present(self) -> bool:
        return not self.missing_apps()

    def run(self) -> None:
        remote = self.ctx.config.flatpak_remote
        failed: list[str] = []
        for app in self.missing_apps():
            logger.info("Installing %s via Flatpak", app)
            try:
                flatpak_install(remote, app)
            except RuntimeError as e:
                logger.error("Failed to install %s: %s", app, e)
                failed.append(app)
        if failed:
            raise RuntimeError(f"Flatpak apps failed to install: {', '.join(failed)}")
