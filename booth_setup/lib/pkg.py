from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Protocol, Sequence

from ..errors import StepFailure
from .command import run_cmd, run_interactive
from .platforms import AppSpec

logger = logging.getLogger(__name__)

BREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
BREW_LOCATIONS = ("/opt/homebrew/bin/brew", "/usr/local/bin/brew")


class PackageManager(Protocol):
    name: str

    def is_available(self) -> bool:
        ...

    def bootstrap(self) -> None:
        ...

    def update(self) -> None:
        ...

    def is_installed(self, app: AppSpec) -> bool:
        ...

    def install(self, app: AppSpec) -> None:
        ...


class BrewPackageManager:
    """Homebrew backend (macOS).

    Queries always execute, even in dry-run: they never modify the machine.
    """

    name = "brew"

    def __init__(self, *, dry_run: bool = False, locations: Sequence[str] = BREW_LOCATIONS) -> None:
        self.dry_run = dry_run
        self.locations = tuple(locations)

    def _brew(self) -> str:
        # A fresh install is not on PATH until the shell profile is reloaded.
        found = shutil.which("brew")
        if found:
            return found
        for candidate in self.locations:
            if Path(candidate).exists():
                return candidate
        return "brew"

    def is_available(self) -> bool:
        return shutil.which("brew") is not None or any(Path(c).exists() for c in self.locations)

    def bootstrap(self) -> None:
        rc = run_interactive(
            ["/bin/bash", "-c", f'/bin/bash -c "$(curl -fsSL {BREW_INSTALL_URL})"'],
            dry_run=self.dry_run,
        )
        if rc != 0:
            raise StepFailure(f"Homebrew installer exited with {rc}")

    def update(self) -> None:
        run_cmd([self._brew(), "update"], dry_run=self.dry_run)

    def is_installed(self, app: AppSpec) -> bool:
        kind = "--cask" if app.cask else "--formula"
        return run_cmd([self._brew(), "list", kind, app.package_id], check=False).ok

    def install(self, app: AppSpec) -> None:
        argv = [self._brew(), "install"]
        if app.cask:
            argv.append("--cask")
        argv.append(app.package_id)
        run_cmd(argv, dry_run=self.dry_run)


class WingetPackageManager:
    """winget backend (Windows)."""

    name = "winget"

    AGREEMENTS = ("--accept-source-agreements",)

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def is_available(self) -> bool:
        return shutil.which("winget") is not None

    def bootstrap(self) -> None:
        raise StepFailure("winget is missing; install 'App Installer' from the Microsoft Store and re-run")

    def update(self) -> None:
        run_cmd(["winget", "source", "update"], dry_run=self.dry_run)

    def is_installed(self, app: AppSpec) -> bool:
        return run_cmd(
            ["winget", "list", "--exact", "--id", app.package_id, *self.AGREEMENTS],
            check=False,
        ).ok

    def install(self, app: AppSpec) -> None:
        run_cmd(
            [
                "winget",
                "install",
                "--exact",
                "--id",
                app.package_id,
                "--silent",
                "--accept-package-agreements",
                *self.AGREEMENTS,
            ],
            dry_run=self.dry_run,
        )


def package_manager_for(platform_name: str, *, dry_run: bool = False) -> PackageManager:
    if platform_name == "macos":
        return BrewPackageManager(dry_run=dry_run)
    if platform_name == "windows":
        return WingetPackageManager(dry_run=dry_run)
    raise ValueError(f"No package manager for platform {platform_name!r}")
