"""Rendering of the standalone demo loader script.

The script opens every demo site (in order) and then launches the fixed
application targets. It carries no reference back to the configuration.
"""

from __future__ import annotations

import logging
import os
import shlex
import stat
from pathlib import Path
from typing import Sequence

from .platforms import LaunchTarget

logger = logging.getLogger(__name__)

LOADER_KINDS = ("bash", "powershell")


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _dq(value: str) -> str:
    return '"' + value.replace('"', '\\"') + '"'


def render_bash(demo_sites: Sequence[str], browser: str, targets: Sequence[LaunchTarget]) -> str:
    lines = [
        "#!/bin/bash",
        "",
        f"# Open all required sites in {browser}",
    ]
    lines += [f"open -a {shlex.quote(browser)} {shlex.quote(site)}" for site in demo_sites]
    for t in targets:
        lines += ["", f"# Open {t.label}"]
        cmd = f"open -a {_dq(t.target)}"
        if t.argument:
            cmd += f" {_dq(t.argument)}"
        lines.append(cmd)
    return "\n".join(lines) + "\n"


def render_powershell(demo_sites: Sequence[str], browser: str, targets: Sequence[LaunchTarget]) -> str:
    lines = [
        f"# Open all required sites in {browser}",
    ]
    lines += [f"Start-Process {_ps_quote(browser)} {_ps_quote(site)}" for site in demo_sites]
    for t in targets:
        lines += ["", f"# Open {t.label}"]
        cmd = f'Start-Process "{t.target}"'
        if t.argument:
            cmd += f' -ArgumentList "{t.argument}"'
        lines.append(cmd)
    return "\n".join(lines) + "\n"


def render_loader_script(
    kind: str,
    demo_sites: Sequence[str],
    browser: str,
    targets: Sequence[LaunchTarget],
) -> str:
    if kind == "bash":
        return render_bash(demo_sites, browser, targets)
    if kind == "powershell":
        return render_powershell(demo_sites, browser, targets)
    raise ValueError(f"Unknown loader kind {kind!r}; expected one of {LOADER_KINDS}")


def write_loader_script(path: Path, text: str, *, executable: bool = True, dry_run: bool = False) -> None:
    """Write the script, replacing any previous version entirely."""
    if dry_run:
        logger.info("Would write %s", str(path))
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    if executable and os.name == "posix":
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
