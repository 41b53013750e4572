from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Paths:
    home: Path

    @property
    def home_manager_dir(self) -> Path:
        return self.home / ".config/home-manager"

    @property
    def home_nix(self) -> Path:
        return self.home_manager_dir / "home.nix"

    @property
    def state_dir(self) -> Path:
        return self.home / ".local/state/desktop-bootstrap"

    @property
    def home_manager_stamp(self) -> Path:
        return self.state_dir / "home-manager-switch.sha256"

    @property
    def vencord_dir(self) -> Path:
        return self.home / ".config/Vencord"

    @property
    def spicetify_bin_dir(self) -> Path:
        return self.home / ".spicetify"

    @property
    def spicetify_marketplace_dir(self) -> Path:
        return self.home / ".config/spicetify/Extensions/spicetify-marketplace"

    @property
    def nix_bin_dirs(self) -> list[Path]:
        return [
            self.home / ".nix-profile/bin",
            Path("/nix/var/nix/profiles/default/bin"),
        ]

    @property
    def nix_install_markers(self) -> list[Path]:
        return [Path("/nix/receipt.json"), Path("/nix/store")]


SPOTIFY_LIST = "/etc/apt/sources.list.d/spotify.list"
SPOTIFY_KEYRING = "/etc/apt/trusted.gpg.d/spotify.gpg"
SPOTIFY_APP_DIRS = ["/usr/share/spotify", "/usr/share/spotify/Apps"]


def user_paths(home: Optional[str] = None) -> Paths:
    return Paths(home=Path(home).expanduser() if home else Path.home())
