from __future__ import annotations

from dataclasses import dataclass

from .config import BootstrapConfig
from .lib.env import Paths


@dataclass(frozen=True)
class BootstrapCtx:
    config: BootstrapConfig
    paths: Paths
