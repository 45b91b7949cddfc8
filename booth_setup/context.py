from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .config import SetupConfig
from .lib.browser import Browser
from .lib.editor import EditorCli
from .lib.gh import CliTool
from .lib.pkg import PackageManager
from .lib.platforms import PlatformProfile
from .lib.probe import Prober
from .lib.process import ProcessControl
from .lib.prompt import Prompter


@dataclass(frozen=True)
class Collaborators:
    """External programs and the operator, behind narrow interfaces."""

    packages: PackageManager
    editors: Mapping[str, EditorCli]
    cli_tool: CliTool
    browser: Browser
    prompter: Prompter
    processes: ProcessControl


@dataclass(frozen=True)
class SetupCtx:
    config: SetupConfig
    profile: PlatformProfile
    tools: Collaborators
    dry_run: bool = False
    # Facts recorded by earlier steps for later ones (e.g. cli_authenticated).
    decisions: Dict[str, Any] = field(default_factory=dict)

    @property
    def prober(self) -> Prober:
        return Prober(self.tools.packages)
