from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError

DEFAULT_CONFIG_PATH = "~/.config/desktop-bootstrap/config.yaml"

DEFAULT_FLATPAK_APPS = [
    "md.obsidian.Obsidian",
    "org.telegram.desktop",
    "com.slack.Slack",
    "com.obsproject.Studio",
    "org.fkoehler.KTailctl",
]

DEFAULT_INSTALLERS = {
    "nix": "https://install.determinate.systems/nix",
    "brave": "https://dl.brave.com/install.sh",
    "discord": "https://discord.com/api/download?platform=linux",
    "vencord": "https://raw.githubusercontent.com/Vendicated/VencordInstaller/main/install.sh",
    "spicetify": "https://raw.githubusercontent.com/spicetify/cli/main/install.sh",
    "spicetify_marketplace": (
        "https://raw.githubusercontent.com/spicetify/marketplace/main/resources/install.sh"
    ),
}


@dataclass(frozen=True)
class BootstrapConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def home_manager_flake(self) -> str:
        return str(self._section("home_manager").get("flake") or "home-manager/master")

    @property
    def home_nix_url(self) -> str:
        return str(
            self._section("home_manager").get("home_nix_url")
            or "https://raw.githubusercontent.com/tanujdargan/kubuntu/refs/heads/main/home.nix"
        )

    @property
    def default_state_version(self) -> str:
        return str(self._section("home_manager").get("default_state_version") or "24.11")

    @property
    def flatpak_remote(self) -> str:
        return str(self._section("flatpak").get("remote") or "flathub")

    @property
    def flatpak_remote_url(self) -> str:
        return str(
            self._section("flatpak").get("remote_url")
            or "https://flathub.org/repo/flathub.flatpakrepo"
        )

    @property
    def flatpak_apps(self) -> List[str]:
        apps = self._section("flatpak").get("apps")
        if apps is None:
            return list(DEFAULT_FLATPAK_APPS)
        return [str(a).strip() for a in apps if str(a).strip()]

    @property
    def spotify_key_url(self) -> str:
        return str(
            self._section("spotify").get("key_url")
            or "https://download.spotify.com/debian/pubkey_C85668DF69375001.gpg"
        )

    @property
    def spotify_repo_line(self) -> str:
        return str(
            self._section("spotify").get("repo_line")
            or "deb https://repository.spotify.com stable non-free"
        )

    def installer_url(self, name: str) -> str:
        url = self._section("installers").get(name) or DEFAULT_INSTALLERS.get(name)
        if not url:
            raise ConfigError(f"No installer URL configured for {name}")
        return str(url)

    def step_override(self, step_id: str) -> Dict[str, Any]:
        return (self._section("steps").get(step_id)) or {}

    def is_enabled(self, step_id: str) -> bool:
        return bool(self.step_override(step_id).get("enabled", True))

    def is_critical(self, step_id: str, default: bool) -> bool:
        return bool(self.step_override(step_id).get("critical", default))


def load_config(path: Optional[str] = None, *, required: bool = False) -> BootstrapConfig:
    """Load a YAML config.

    A missing file is fatal only when the caller asked for it explicitly
    (required=True); otherwise built-in defaults apply.
    """

    p = Path(path or DEFAULT_CONFIG_PATH).expanduser()
    if not p.exists():
        if required:
            raise ConfigError(f"Config file not found: {p}")
        return BootstrapConfig(raw={})

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError(f"Config must be YAML: {p}")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the bootstrap config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{p} must contain a mapping/object")

    steps = raw.get("steps") or {}
    if not isinstance(steps, dict):
        raise ConfigError("steps must be a mapping of step_id -> overrides")
    for step_id, override in steps.items():
        if override is None:
            continue
        if not isinstance(override, dict):
            raise ConfigError(f"steps.{step_id} must be a mapping")
        for key in ("enabled", "critical"):
            if key in override and not isinstance(override[key], bool):
                raise ConfigError(
                    f"steps.{step_id}.{key} must be true or false, got {override[key]!r}"
                )
    apps = (raw.get("flatpak") or {}).get("apps")
    if apps is not None and not isinstance(apps, list):
        raise ConfigError("flatpak.apps must be a list")

    return BootstrapConfig(raw=raw)
