from __future__ import annotations

import logging
from typing import List

from ..context import SetupCtx
from ..errors import CommandError
from ..pipeline import CHANGED, FAILED, SATISFIED, SKIPPED, StepResult

logger = logging.getLogger(__name__)


class WebShortcutsStep:
    """Walk the operator through installing each web tool as a desktop app.

    Installation itself happens in the browser; we open the page and wait.
    """

    step_id = "50_web_shortcuts"

    def run(self, ctx: SetupCtx) -> StepResult:
        shortcuts = ctx.config.web_shortcuts
        if not shortcuts:
            return StepResult(self.step_id, SATISFIED, "(no web shortcuts configured)")

        browser = ctx.tools.browser
        if not browser.is_available():
            return StepResult(self.step_id, SKIPPED, f"{browser.name} not found; web shortcuts not installed")

        added: List[str] = []
        warnings: List[str] = []

        for sc in shortcuts:
            if ctx.profile.web_app_path(sc.name).exists():
                logger.info("%s is already installed as a web app", sc.name)
                continue

            try:
                browser.open(sc.url)
            except CommandError as e:
                warnings.append(f"could not open {sc.url}: {e}")
                continue

            ctx.tools.prompter.wait_for_confirmation(
                f"Please manually add {sc.name} ({sc.url}) as a web app. {ctx.profile.web_app_instructions}"
            )
            added.append(sc.name)

        if not added and not warnings:
            return StepResult(self.step_id, SATISFIED, f"(all {len(shortcuts)} web apps present)")
        if not added:
            return StepResult(self.step_id, FAILED, "no web shortcut pages could be opened", tuple(warnings))
        return StepResult(self.step_id, CHANGED, f"confirmed: {', '.join(added)}", tuple(warnings))
