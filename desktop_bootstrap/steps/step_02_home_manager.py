from __future__ import annotations

import logging

from ..context import BootstrapCtx
from ..lib.command import have, run_cmd

logger = logging.getLogger(__name__)


class HomeManagerStep:
    step_id = "02_home_manager"
    name = "Ensure Home Manager is available"
    critical = True

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def is_present(self) -> bool:
        return have("home-manager")

    def run(self) -> None:
        logger.info("Bootstrapping Home Manager")
        run_cmd(
            ["nix", "run", self.ctx.config.home_manager_flake, "--", "init", "--switch"],
            capture=False,
        )
