from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import CommandError, StepFailure
from ..pipeline import CHANGED, SATISFIED, StepResult

logger = logging.getLogger(__name__)


class InstallApplicationStep:
    def __init__(self, app_key: str) -> None:
        self.app_key = app_key
        self.step_id = f"20_install_{app_key}"

    def run(self, ctx: SetupCtx) -> StepResult:
        app = ctx.profile.app(self.app_key)
        pm = ctx.tools.packages

        if ctx.prober.is_application_installed(app):
            return StepResult(self.step_id, SATISFIED, f"({app.name} is already installed)")

        if not pm.is_available():
            raise StepFailure(f"cannot install {app.name}: {pm.name} is not available")

        logger.info("Installing %s...", app.name)
        try:
            pm.install(app)
        except CommandError as e:
            raise StepFailure(f"installing {app.name} failed: {e}") from e
        return StepResult(self.step_id, CHANGED, f"installed {app.name}")
