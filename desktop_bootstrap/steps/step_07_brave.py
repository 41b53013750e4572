from __future__ import annotations

from ..context import BootstrapCtx
from ..lib.command import have, run_cmd
from ..lib.net import fetch_text
from ..lib.pkg import dpkg_has_package


class BraveStep:
    step_id = "07_brave"
    name = "Brave Browser"
    critical = False

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def is_present(self) -> bool:
        return have("brave-browser") or dpkg_has_package("brave-browser")

    def run(self) -> None:
        script = fetch_text(self.ctx.config.installer_url("brave"))
        run_cmd(["sudo", "bash", "-s"], input_text=script, capture=False)
