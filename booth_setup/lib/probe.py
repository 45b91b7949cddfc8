from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from .pkg import PackageManager
from .platforms import AppSpec

logger = logging.getLogger(__name__)


class Prober:
    """Non-mutating answers to "is this already in place?"."""

    def __init__(self, packages: PackageManager) -> None:
        self.packages = packages

    def is_application_installed(self, app: AppSpec) -> bool:
        return bool(self.packages.is_installed(app))

    def is_config_marked(self, path: Path, sentinel: str) -> bool:
        """True if `path` contains `sentinel` as an exact line.

        A missing or unreadable file counts as not marked.
        """
        try:
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Could not read %s (%s); treating as unmarked", path, e)
            return False
        return any(line.rstrip("\r") == sentinel for line in text.split("\n"))

    def missing_applications(self, apps: Iterable[AppSpec]) -> List[AppSpec]:
        """Apps not installed. A probe that errors counts the app as missing."""
        missing: List[AppSpec] = []
        for app in apps:
            try:
                present = self.is_application_installed(app)
            except Exception as e:
                logger.warning("Could not probe %s: %s", app.name, e)
                present = False
            if not present:
                missing.append(app)
        return missing
