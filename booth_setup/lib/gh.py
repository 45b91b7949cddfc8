from __future__ import annotations

import logging
import shutil
from typing import Protocol, Set

from .command import run_cmd, run_interactive

logger = logging.getLogger(__name__)


class CliTool(Protocol):
    def is_available(self) -> bool:
        ...

    def is_authenticated(self) -> bool:
        ...

    def login(self) -> None:
        ...

    def list_extensions(self) -> Set[str]:
        ...

    def install_extension(self, extension_id: str) -> None:
        ...


class GhCli:
    """GitHub CLI collaborator."""

    def __init__(self, executable: str = "gh", *, dry_run: bool = False) -> None:
        self.executable = executable
        self.dry_run = dry_run

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def is_authenticated(self) -> bool:
        return run_cmd([self.executable, "auth", "status"], check=False).ok

    def login(self) -> None:
        # Blocks until the operator finishes (or abandons) the login flow.
        rc = run_interactive([self.executable, "auth", "login"], dry_run=self.dry_run)
        if rc != 0:
            logger.warning("gh auth login exited with %s", rc)

    def list_extensions(self) -> Set[str]:
        """Installed extensions as lower-cased `owner/repo`."""
        r = run_cmd([self.executable, "extension", "list"], check=False)
        if not r.ok:
            return set()
        installed: Set[str] = set()
        for line in r.stdout.splitlines():
            # Non-tty output: "gh name<TAB>owner/repo<TAB>version"
            cols = [c.strip() for c in line.split("\t")]
            if len(cols) >= 2 and "/" in cols[1]:
                installed.add(cols[1].lower())
        return installed

    def install_extension(self, extension_id: str) -> None:
        run_cmd([self.executable, "extension", "install", extension_id], dry_run=self.dry_run)
