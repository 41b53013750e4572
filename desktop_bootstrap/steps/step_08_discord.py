from __future__ import annotations

import logging
import tempfile

from ..context import BootstrapCtx
from ..lib.command import have
from ..lib.net import download
from ..lib.pkg import apt_install

logger = logging.getLogger(__name__)


class DiscordStep:
    step_id = "08_discord"
    name = "Discord"
    critical = False

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def is_present(self) -> bool:
        return have("discord")

    def run(self) -> None:
        with tempfile.TemporaryDirectory(prefix="discord-") as tmp:
            files = download(self.ctx.config.installer_url("discord"), tmp)
            debs = [str(p) for p in files if p.name.startswith("discord") and p.suffix == ".deb"]
            if not debs:
                raise RuntimeError("Discord download did not produce a discord-*.deb")
            # apt needs a path (not a bare name) to treat the argument as a local file.
            apt_install(debs)
