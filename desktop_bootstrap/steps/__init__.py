from .step_01_nix import NixStep
from .step_02_home_manager import HomeManagerStep
from .step_03_home_nix import HomeNixStep
from .step_04_home_manager_switch import HomeManagerSwitchStep
from .step_05_spotify import SpotifyStep
from .step_06_flatpak import FlatpakStep
from .step_07_brave import BraveStep
from .step_08_discord import DiscordStep
from .step_09_vencord import VencordStep
from .step_10_spicetify import SpicetifyStep
from .step_11_flatpak_apps import FlatpakAppsStep

__all__ = [
    "NixStep",
    "HomeManagerStep",
    "HomeNixStep",
    "HomeManagerSwitchStep",
    "SpotifyStep",
    "FlatpakStep",
    "BraveStep",
    "DiscordStep",
    "VencordStep",
    "SpicetifyStep",
    "FlatpakAppsStep",
]
