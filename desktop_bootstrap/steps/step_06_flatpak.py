from __future__ import annotations

import logging

from ..context import BootstrapCtx
from ..lib.command import have
from ..lib.flatpak import flatpak_add_remote
from ..lib.pkg import apt_install

logger = logging.getLogger(__name__)


class FlatpakStep:
    step_id = "06_flatpak"
    name = "Flatpak + KDE integration"
    critical = False

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def is_present(self) -> bool:
        return have("flatpak")

    def run(self) -> None:
        cfg = self.ctx.config
        apt_install(["flatpak", "kde-config-flatpak"])
        flatpak_add_remote(cfg.flatpak_remote, cfg.flatpak_remote_url)
