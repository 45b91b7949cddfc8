from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import StepFailure
from ..lib.loader_script import render_loader_script, write_loader_script
from ..pipeline import CHANGED, StepResult

logger = logging.getLogger(__name__)


class DemoLoaderStep:
    step_id = "80_demo_loader"

    def run(self, ctx: SetupCtx) -> StepResult:
        profile = ctx.profile
        logger.info("Creating demo loader script...")
        text = render_loader_script(
            profile.loader_kind,
            ctx.config.demo_sites,
            profile.browser_name,
            profile.launch_targets,
        )
        try:
            write_loader_script(profile.loader_path, text, executable=True, dry_run=ctx.dry_run)
        except OSError as e:
            raise StepFailure(f"could not write {profile.loader_path}: {e}") from e
        return StepResult(self.step_id, CHANGED, f"created demo loader script at {profile.loader_path}")
