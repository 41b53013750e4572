from __future__ import annotations

import logging

from ..context import BootstrapCtx
from ..lib.command import have, run_cmd
from ..lib.net import fetch_text
from ..lib.nix import activate_nix_profile

logger = logging.getLogger(__name__)


class NixStep:
    step_id = "01_nix"
    name = "Ensure Nix is available"
    critical = True

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def is_present(self) -> bool:
        return have("nix")

    def run(self) -> None:
        paths = self.ctx.paths
        if any(m.exists() for m in paths.nix_install_markers):
            logger.warning("Partial / previous Nix detected, activating existing profile")
            activate_nix_profile(paths)
            if have("nix"):
                return

        logger.info("Installing Nix (Determinate Systems)")
        script = fetch_text(self.ctx.config.installer_url("nix"))
        run_cmd(
            ["sh", "-s", "--", "install", "--no-confirm"], input_text=script, capture=False
        )
        activate_nix_profile(paths)
        if not have("nix"):
            raise RuntimeError("Nix installer finished but `nix` is still not on PATH")
