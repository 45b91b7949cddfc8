from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .config import SetupConfig, load_setup_config
from .context import Collaborators, SetupCtx
from .errors import ConfigError
from .lib.browser import SystemBrowser
from .lib.editor import VsCodeCli
from .lib.env import PATHS
from .lib.gh import GhCli
from .lib.pkg import package_manager_for
from .lib.platforms import MANDATORY_APPS, PROFILES, PlatformProfile, get_profile
from .lib.process import SystemProcessControl
from .lib.prompt import TerminalPrompter
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import RunSummary, Step, run_pipeline, verify_installation
from .steps import (
    CliAuthStep,
    CliExtensionsStep,
    DemoLoaderStep,
    EditorExtensionsStep,
    EditorThemeStep,
    InstallApplicationStep,
    MediaPlayerSettingsStep,
    PackageManagerStep,
    WebLoginStep,
    WebShortcutsStep,
)

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = PATHS.config_default


def build_steps(profile: PlatformProfile) -> List[Step]:
    """Fixed order: apps before anything that drives them, auth before CLI extensions."""
    return [
        WebLoginStep(),
        PackageManagerStep(),
        *[InstallApplicationStep(key) for key in MANDATORY_APPS],
        MediaPlayerSettingsStep(),
        CliAuthStep(),
        CliExtensionsStep(),
        WebShortcutsStep(),
        *[EditorExtensionsStep(e.key) for e in profile.editors],
        *[EditorThemeStep(e.key) for e in profile.editors],
        DemoLoaderStep(),
    ]


def build_collaborators(profile: PlatformProfile, *, dry_run: bool = False) -> Collaborators:
    return Collaborators(
        packages=package_manager_for(profile.name, dry_run=dry_run),
        editors={e.key: VsCodeCli(e.cli_path, dry_run=dry_run) for e in profile.editors},
        cli_tool=GhCli(dry_run=dry_run),
        browser=SystemBrowser(
            profile.browser_name,
            profile.browser_launcher,
            profile.browser_paths,
            dry_run=dry_run,
        ),
        prompter=TerminalPrompter(),
        processes=SystemProcessControl(profile.stop_process_argv, dry_run=dry_run),
    )


def run_setup(ctx: SetupCtx) -> RunSummary:
    """Run every step, then verify. Never raises for a step failure."""

    result = run_pipeline(ctx=ctx, steps=build_steps(ctx.profile))
    verification = verify_installation(ctx)
    summary = RunSummary(pipeline=result, verification=verification)

    if summary.ok and not result.failed_steps:
        logger.info("Script completed successfully")
    elif summary.ok:
        logger.warning(
            "Applications are installed but some steps failed (%s); re-run to retry",
            ", ".join(result.failed_steps),
        )
    else:
        logger.warning(
            "There was an issue with the installation (missing: %s). "
            "Please check the messages above and re-run.",
            ", ".join(verification.missing),
        )
    return summary


def run(
    *,
    config_path: str = DEFAULT_CONFIG_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    platform_name: Optional[str] = None,
    home: Optional[Path] = None,
    dry_run: bool = False,
    verbose: bool = False,
    tools: Optional[Collaborators] = None,
) -> RunSummary:
    """Load the configuration, then provision the machine.

    A ConfigError is raised before any collaborator is touched.
    """

    actual_log_path = configure_logging(
        log_path=log_path,
        level=logging.DEBUG if verbose else logging.INFO,
    )
    logger.debug("Log file: %s", actual_log_path)

    config: SetupConfig = load_setup_config(config_path)
    profile = get_profile(platform_name, home=home)
    logger.info("Provisioning for %s (dry_run=%s)", profile.name, dry_run)

    ctx = SetupCtx(
        config=config,
        profile=profile,
        tools=tools if tools is not None else build_collaborators(profile, dry_run=dry_run),
        dry_run=dry_run,
    )
    return run_setup(ctx)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="booth-setup")
    p.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to the setup config (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the setup log")
    p.add_argument("--platform", choices=sorted(PROFILES), default=None, help="Override host detection")
    p.add_argument("--dry-run", action="store_true", help="Log installs and writes without performing them")
    p.add_argument("--verbose", action="store_true", help="Log command output")

    args = p.parse_args(argv)

    try:
        run(
            config_path=args.config,
            log_path=args.log,
            platform_name=args.platform,
            dry_run=bool(args.dry_run),
            verbose=bool(args.verbose),
        )
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 2
    return 0
