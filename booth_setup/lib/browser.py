from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Protocol, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


class Browser(Protocol):
    name: str

    def is_available(self) -> bool:
        ...

    def open(self, url: str) -> None:
        ...


class SystemBrowser:
    def __init__(
        self,
        name: str,
        launcher: Sequence[str],
        install_paths: Sequence[Path] = (),
        *,
        dry_run: bool = False,
    ) -> None:
        self.name = name
        self.launcher = list(launcher)
        self.install_paths = [Path(p) for p in install_paths]
        self.dry_run = dry_run

    def is_available(self) -> bool:
        if any(p.exists() for p in self.install_paths):
            return True
        return shutil.which(self.name) is not None

    def open(self, url: str) -> None:
        run_cmd([*self.launcher, url], dry_run=self.dry_run)
