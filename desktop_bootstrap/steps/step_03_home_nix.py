from __future__ import annotations

import logging
import time
from typing import Optional

from ..context import BootstrapCtx
from ..lib.net import fetch_text
from ..lib.nix import extract_state_version, render_home_nix

logger = logging.getLogger(__name__)


class HomeNixStep:
    """Sync home.nix from upstream while keeping the local home.stateVersion.

    Present when the local file already equals the rendered upstream copy, so
    re-runs neither rewrite the file nor pile up backups.
    """

    step_id = "03_home_nix"
    name = "Prepare home.nix"
    critical = True

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx
        self._rendered: Optional[str] = None

    def _state_version(self) -> str:
        p = self.ctx.paths.home_nix
        if p.is_file():
            found = extract_state_version(p.read_text(encoding="utf-8"))
            if found:
                return found
        return self.ctx.config.default_state_version

    def rendered(self) -> str:
        if self._rendered is None:
            upstream = fetch_text(self.ctx.config.home_nix_url)
            self._rendered = render_home_nix(upstream, self._state_version())
        return self._rendered

    def is_present(self) -> bool:
        p = self.ctx.paths.home_nix
        if not p.is_file():
            return False
        return p.read_text(encoding="utf-8") == self.rendered()

    def run(self) -> None:
        p = self.ctx.paths.home_nix
        content = self.rendered()
        state_version = self._state_version()
        logger.info("Using home.stateVersion = %s", state_version)

        p.parent.mkdir(parents=True, exist_ok=True)
        if p.is_file():
            backup = p.with_name(f"{p.name}.bak.{int(time.time())}")
            backup.write_bytes(p.read_bytes())
            logger.info("Backed up %s -> %s", p, backup)
        p.write_text(content, encoding="utf-8")
        self._rendered = None
