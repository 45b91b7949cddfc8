from .step_05_web_login import WebLoginStep
from .step_10_package_manager import PackageManagerStep
from .step_20_install_apps import InstallApplicationStep
from .step_30_media_player_settings import MediaPlayerSettingsStep
from .step_40_cli_auth import CliAuthStep
from .step_45_cli_extensions import CliExtensionsStep
from .step_50_web_shortcuts import WebShortcutsStep
from .step_60_editor_extensions import EditorExtensionsStep
from .step_70_editor_theme import EditorThemeStep
from .step_80_demo_loader import DemoLoaderStep

__all__ = [
    "WebLoginStep",
    "PackageManagerStep",
    "InstallApplicationStep",
    "MediaPlayerSettingsStep",
    "CliAuthStep",
    "CliExtensionsStep",
    "WebShortcutsStep",
    "EditorExtensionsStep",
    "EditorThemeStep",
    "DemoLoaderStep",
]
