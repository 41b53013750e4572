from __future__ import annotations

import logging

from ..context import BootstrapCtx
from ..lib.command import have, run_cmd
from ..lib.env import SPOTIFY_APP_DIRS
from ..lib.net import fetch_text
from ..lib.nix import prepend_path

logger = logging.getLogger(__name__)


class SpicetifyStep:
    step_id = "10_spicetify"
    name = "Spicetify"
    critical = False

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def is_present(self) -> bool:
        return have("spicetify") and self.ctx.paths.spicetify_marketplace_dir.is_dir()

    def _warn_on_failure(self, what: str, returncode: int) -> None:
        if returncode != 0:
            logger.warning("%s exited with %d (continuing)", what, returncode)

    def run(self) -> None:
        cfg = self.ctx.config
        paths = self.ctx.paths

        if not have("spicetify"):
            logger.info("Installing Spicetify CLI")
            # Spicetify patches Spotify's files in place.
            r = run_cmd(["sudo", "chmod", "-R", "a+wr", *SPOTIFY_APP_DIRS], check=False)
            self._warn_on_failure("chmod of Spotify dirs", r.returncode)
            run_cmd(
                ["sh", "-s"], input_text=fetch_text(cfg.installer_url("spicetify")), capture=False
            )
            prepend_path(paths.spicetify_bin_dir)

        r = run_cmd(["spicetify", "backup", "apply"], check=False, capture=False)
        self._warn_on_failure("spicetify backup apply", r.returncode)

        if not paths.spicetify_marketplace_dir.is_dir():
            logger.info("Installing Spicetify Marketplace")
            script = fetch_text(cfg.installer_url("spicetify_marketplace"))
            # The marketplace installer asks for confirmations on stdin.
            r = run_cmd(
                ["sh", "-c", script], input_text="y\n" * 16, check=False, capture=False
            )
            self._warn_on_failure("Spicetify Marketplace installer", r.returncode)
