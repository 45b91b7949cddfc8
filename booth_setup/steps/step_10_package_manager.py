from __future__ import annotations

import logging
from typing import List

from ..context import SetupCtx
from ..errors import CommandError, StepFailure
from ..pipeline import CHANGED, SATISFIED, StepResult

logger = logging.getLogger(__name__)


class PackageManagerStep:
    step_id = "10_package_manager"

    def run(self, ctx: SetupCtx) -> StepResult:
        pm = ctx.tools.packages
        status = SATISFIED
        detail = f"({pm.name} is already installed)"
        warnings: List[str] = []

        if not pm.is_available():
            logger.info("Installing %s...", pm.name)
            pm.bootstrap()
            if not ctx.dry_run and not pm.is_available():
                raise StepFailure(f"{pm.name} is still unavailable after bootstrap")
            status, detail = CHANGED, f"installed {pm.name}"

        logger.info("Updating %s...", pm.name)
        try:
            pm.update()
        except CommandError as e:
            warnings.append(f"{pm.name} update failed: {e}")

        return StepResult(self.step_id, status, detail, tuple(warnings))
