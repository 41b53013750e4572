from __future__ import annotations

from ..context import BootstrapCtx
from ..lib.command import run_cmd
from ..lib.net import fetch_text


class VencordStep:
    step_id = "09_vencord"
    name = "Vencord"
    critical = False

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def is_present(self) -> bool:
        return self.ctx.paths.vencord_dir.is_dir()

    def run(self) -> None:
        script = fetch_text(self.ctx.config.installer_url("vencord"))
        run_cmd(["sh", "-c", script], capture=False)
