from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    config_default: str = "config.json"
    log_default: str = "~/.booth-setup/booth-setup.log"


PATHS = Paths()
