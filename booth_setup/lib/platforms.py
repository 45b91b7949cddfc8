from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from ..errors import ConfigError

EDITOR = "editor"
EDITOR_PREVIEW = "editor_preview"
CLI_TOOL = "cli"
MEDIA_PLAYER = "media_player"

# Applications whose presence decides overall success.
MANDATORY_APPS = (EDITOR, EDITOR_PREVIEW, CLI_TOOL, MEDIA_PLAYER)


@dataclass(frozen=True)
class AppSpec:
    key: str
    name: str
    package_id: str
    # brew distinguishes GUI casks from formulae; winget ignores this.
    cask: bool = False


@dataclass(frozen=True)
class EditorVariant:
    key: str
    app_key: str
    label: str
    cli_path: str
    settings_path: Path


@dataclass(frozen=True)
class LaunchTarget:
    """One application the loader script starts.

    `target` and `argument` are inserted double-quoted so the shell expands
    variables like $HOME when the script runs.
    """

    label: str
    target: str
    argument: Optional[str] = None


@dataclass(frozen=True)
class PlatformProfile:
    name: str
    apps: Tuple[AppSpec, ...]
    editors: Tuple[EditorVariant, ...]
    media_prefs_path: Path
    media_process_name: str
    stop_process_argv: Tuple[str, ...]
    browser_name: str
    browser_launcher: Tuple[str, ...]
    browser_paths: Tuple[Path, ...]
    web_app_dir: Path
    web_app_suffix: str
    web_app_instructions: str
    loader_path: Path
    loader_kind: str
    launch_targets: Tuple[LaunchTarget, ...]

    def app(self, key: str) -> AppSpec:
        for a in self.apps:
            if a.key == key:
                return a
        raise KeyError(key)

    def editor(self, key: str) -> EditorVariant:
        for e in self.editors:
            if e.key == key:
                return e
        raise KeyError(key)

    def web_app_path(self, name: str) -> Path:
        return self.web_app_dir / f"{name}{self.web_app_suffix}"


def macos_profile(home: Optional[Path] = None) -> PlatformProfile:
    home = Path(home) if home is not None else Path.home()
    app_support = home / "Library/Application Support"
    return PlatformProfile(
        name="macos",
        apps=(
            AppSpec(EDITOR, "Visual Studio Code", "visual-studio-code", cask=True),
            AppSpec(EDITOR_PREVIEW, "Visual Studio Code - Insiders", "visual-studio-code-insiders", cask=True),
            AppSpec(CLI_TOOL, "GitHub CLI", "gh"),
            AppSpec(MEDIA_PLAYER, "VLC", "vlc", cask=True),
        ),
        editors=(
            EditorVariant(
                key="code",
                app_key=EDITOR,
                label="VS Code",
                cli_path="/Applications/Visual Studio Code.app/Contents/Resources/app/bin/code",
                settings_path=app_support / "Code/User/settings.json",
            ),
            EditorVariant(
                key="code_insiders",
                app_key=EDITOR_PREVIEW,
                label="VS Code Insiders",
                cli_path="/Applications/Visual Studio Code - Insiders.app/Contents/Resources/app/bin/code",
                settings_path=app_support / "Code - Insiders/User/settings.json",
            ),
        ),
        media_prefs_path=home / "Library/Preferences/org.videolan.vlc/vlcrc",
        media_process_name="VLC",
        stop_process_argv=("killall",),
        browser_name="Safari",
        browser_launcher=("open", "-a", "Safari"),
        browser_paths=(Path("/Applications/Safari.app"),),
        # Safari "Add to Dock" web apps land here.
        web_app_dir=home / "Applications",
        web_app_suffix=".app",
        web_app_instructions="In Safari click the Share button, then select 'Add to Dock'.",
        loader_path=home / "Desktop/load-demos.sh",
        loader_kind="bash",
        launch_targets=(
            LaunchTarget("VS Code", "Visual Studio Code"),
            LaunchTarget("VS Code Insiders", "Visual Studio Code - Insiders"),
            LaunchTarget("VLC pointing to Videos folder", "VLC", "$HOME/Videos"),
        ),
    )


def windows_profile(
    home: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> PlatformProfile:
    home = Path(home) if home is not None else Path.home()
    env = os.environ if env is None else env
    appdata = Path(env.get("APPDATA") or home / "AppData/Roaming")
    local = Path(env.get("LOCALAPPDATA") or home / "AppData/Local")
    program_files_x86 = Path(env.get("ProgramFiles(x86)") or "C:/Program Files (x86)")
    edge = program_files_x86 / "Microsoft/Edge/Application/msedge.exe"
    return PlatformProfile(
        name="windows",
        apps=(
            AppSpec(EDITOR, "Visual Studio Code", "Microsoft.VisualStudioCode"),
            AppSpec(EDITOR_PREVIEW, "Visual Studio Code - Insiders", "Microsoft.VisualStudioCode.Insiders"),
            AppSpec(CLI_TOOL, "GitHub CLI", "GitHub.cli"),
            AppSpec(MEDIA_PLAYER, "VLC", "VideoLAN.VLC"),
        ),
        editors=(
            EditorVariant(
                key="code",
                app_key=EDITOR,
                label="VS Code",
                cli_path=str(local / "Programs/Microsoft VS Code/bin/code.cmd"),
                settings_path=appdata / "Code/User/settings.json",
            ),
            EditorVariant(
                key="code_insiders",
                app_key=EDITOR_PREVIEW,
                label="VS Code Insiders",
                cli_path=str(local / "Programs/Microsoft VS Code Insiders/bin/code-insiders.cmd"),
                settings_path=appdata / "Code - Insiders/User/settings.json",
            ),
        ),
        media_prefs_path=appdata / "vlc/vlcrc",
        media_process_name="vlc.exe",
        stop_process_argv=("taskkill", "/F", "/IM"),
        browser_name="msedge",
        # Not via cmd.exe: it splits URLs at '&'.
        browser_launcher=(str(edge),),
        browser_paths=(edge,),
        # Edge "Install this site as an app" adds a Start menu shortcut.
        web_app_dir=appdata / "Microsoft/Windows/Start Menu/Programs",
        web_app_suffix=".lnk",
        web_app_instructions="In Edge open the '...' menu, then Apps > Install this site as an app.",
        loader_path=home / "Desktop/load-demos.ps1",
        loader_kind="powershell",
        launch_targets=(
            LaunchTarget("VS Code", r"$env:LOCALAPPDATA\Programs\Microsoft VS Code\Code.exe"),
            LaunchTarget(
                "VS Code Insiders",
                r"$env:LOCALAPPDATA\Programs\Microsoft VS Code Insiders\Code - Insiders.exe",
            ),
            LaunchTarget(
                "VLC pointing to Videos folder",
                r"$env:ProgramFiles\VideoLAN\VLC\vlc.exe",
                r"$HOME\Videos",
            ),
        ),
    )


PROFILES = {
    "macos": macos_profile,
    "windows": windows_profile,
}


def detect_platform_name() -> str:
    system = platform.system()
    if system == "Darwin":
        return "macos"
    if system == "Windows":
        return "windows"
    raise ConfigError(f"Unsupported host platform: {system or 'unknown'} (expected macOS or Windows)")


def get_profile(name: Optional[str] = None, *, home: Optional[Path] = None) -> PlatformProfile:
    name = name or detect_platform_name()
    factory = PROFILES.get(name)
    if factory is None:
        raise ConfigError(f"Unknown platform {name!r}; choose one of {', '.join(sorted(PROFILES))}")
    return factory(home=home)
