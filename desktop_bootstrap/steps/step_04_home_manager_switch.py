from __future__ import annotations

import logging

from ..context import BootstrapCtx
from ..lib.command import run_cmd
from ..lib.nix import file_digest

logger = logging.getLogger(__name__)


class HomeManagerSwitchStep:
    """Apply the Home Manager flake.

    A stamp holding the digest of the last applied home.nix makes the switch
    skippable until home.nix changes.
    """

    step_id = "04_home_manager_switch"
    name = "Apply Home Manager configuration"
    critical = True

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def is_present(self) -> bool:
        paths = self.ctx.paths
        if not (paths.home_nix.is_file() and paths.home_manager_stamp.is_file()):
            return False
        applied = paths.home_manager_stamp.read_text(encoding="utf-8").strip()
        return applied == file_digest(paths.home_nix)

    def run(self) -> None:
        paths = self.ctx.paths
        run_cmd(
            [
                "nix",
                "run",
                self.ctx.config.home_manager_flake,
                "--",
                "switch",
                "--flake",
                str(paths.home_manager_dir),
            ],
            capture=False,
        )
        paths.home_manager_stamp.parent.mkdir(parents=True, exist_ok=True)
        paths.home_manager_stamp.write_text(file_digest(paths.home_nix) + "\n", encoding="utf-8")
        logger.info("Home Manager switch done ✔")
