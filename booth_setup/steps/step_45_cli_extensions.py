from __future__ import annotations

import logging

from ..context import SetupCtx
from ..pipeline import SATISFIED, SKIPPED, StepResult
from .common import install_each
from .step_40_cli_auth import AUTH_DECISION

logger = logging.getLogger(__name__)


class CliExtensionsStep:
    step_id = "45_cli_extensions"

    def run(self, ctx: SetupCtx) -> StepResult:
        ids = ctx.config.cli_extension_ids
        if not ids:
            return StepResult(self.step_id, SATISFIED, "(no GitHub CLI extensions configured)")

        if not ctx.decisions.get(AUTH_DECISION):
            return StepResult(
                self.step_id,
                SKIPPED,
                f"GitHub CLI is not authenticated; {len(ids)} extension(s) not installed",
            )

        cli = ctx.tools.cli_tool
        logger.info("Installing GitHub CLI extensions...")
        return install_each(
            self.step_id,
            ids,
            cli.list_extensions(),
            cli.install_extension,
            what="GitHub CLI extension",
        )
