from __future__ import annotations

import logging

from ..context import SetupCtx
from ..pipeline import CHANGED, SATISFIED, SKIPPED, StepResult

logger = logging.getLogger(__name__)

AUTH_DECISION = "cli_authenticated"


class CliAuthStep:
    step_id = "40_cli_auth"

    def run(self, ctx: SetupCtx) -> StepResult:
        cli = ctx.tools.cli_tool
        ctx.decisions[AUTH_DECISION] = False

        if not cli.is_available():
            return StepResult(self.step_id, SKIPPED, "GitHub CLI is not installed; login not attempted")

        if cli.is_authenticated():
            ctx.decisions[AUTH_DECISION] = True
            return StepResult(self.step_id, SATISFIED, "(GitHub CLI is already authenticated)")

        logger.info("Please login to GitHub CLI first...")
        cli.login()

        if cli.is_authenticated():
            ctx.decisions[AUTH_DECISION] = True
            return StepResult(self.step_id, CHANGED, "GitHub CLI authenticated")

        return StepResult(
            self.step_id,
            SKIPPED,
            "GitHub CLI login required for installing extensions. Please run 'gh auth login' manually.",
        )
