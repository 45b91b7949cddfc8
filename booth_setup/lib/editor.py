from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Protocol, Set

from .command import run_cmd

logger = logging.getLogger(__name__)

THEME_KEY = "workbench.colorTheme"


class EditorCli(Protocol):
    def is_available(self) -> bool:
        ...

    def list_extensions(self) -> Set[str]:
        ...

    def install_extension(self, extension_id: str) -> None:
        ...


class VsCodeCli:
    """The `code` command line shipped inside a VS Code install."""

    def __init__(self, cli_path: str, *, dry_run: bool = False) -> None:
        self.cli_path = cli_path
        self.dry_run = dry_run

    def is_available(self) -> bool:
        return run_cmd([self.cli_path, "--version"], check=False).ok

    def list_extensions(self) -> Set[str]:
        """Installed extension ids, lower-cased (VS Code ids are case-insensitive)."""
        r = run_cmd([self.cli_path, "--list-extensions"], check=False)
        if not r.ok:
            return set()
        return {line.strip().lower() for line in r.stdout.splitlines() if line.strip()}

    def install_extension(self, extension_id: str) -> None:
        run_cmd([self.cli_path, "--install-extension", extension_id], dry_run=self.dry_run)


def read_settings(path: Path) -> Dict[str, Any]:
    """Load an editor settings document; a missing file is an empty document.

    Raises ValueError when the file exists but is not a JSON object.
    """
    if not path.exists():
        return {}
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object, got {type(data).__name__}")
    return data


def write_settings(path: Path, settings: Dict[str, Any], *, dry_run: bool = False) -> None:
    if dry_run:
        logger.info("Would write %s", str(path))
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps(settings, indent=4) + "\n", encoding="utf-8")
    tmp.replace(path)
