from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


class ProcessControl(Protocol):
    def stop(self, process_name: str) -> None:
        ...


class SystemProcessControl:
    """Best-effort process termination (killall / taskkill)."""

    def __init__(self, kill_argv: Sequence[str], *, dry_run: bool = False) -> None:
        self.kill_argv = list(kill_argv)
        self.dry_run = dry_run

    def stop(self, process_name: str) -> None:
        r = run_cmd([*self.kill_argv, process_name], check=False, dry_run=self.dry_run)
        if not r.ok:
            logger.debug("%s was not running", process_name)
