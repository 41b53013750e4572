from __future__ import annotations

import logging
from pathlib import Path

from ..context import BootstrapCtx
from ..lib.command import have
from ..lib.env import SPOTIFY_KEYRING, SPOTIFY_LIST
from ..lib.net import fetch_text
from ..lib.pkg import add_apt_source, apt_install, apt_update, dpkg_has_package

logger = logging.getLogger(__name__)


class SpotifyStep:
    step_id = "05_spotify"
    name = "Spotify"
    critical = False

    def __init__(self, ctx: BootstrapCtx) -> None:
        self.ctx = ctx

    def is_present(self) -> bool:
        return have("spotify") or dpkg_has_package("spotify-client")

    def run(self) -> None:
        cfg = self.ctx.config
        if not Path(SPOTIFY_LIST).exists():
            add_apt_source(
                key_text=fetch_text(cfg.spotify_key_url),
                keyring=SPOTIFY_KEYRING,
                list_path=SPOTIFY_LIST,
                repo_line=cfg.spotify_repo_line,
            )
            apt_update()
        apt_install(["spotify-client"])
