from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import CommandError, StepFailure
from ..pipeline import CHANGED, SATISFIED, StepResult

logger = logging.getLogger(__name__)


class WebLoginStep:
    """Have the operator sign in to the service's website with the demo account."""

    step_id = "05_web_login"

    def run(self, ctx: SetupCtx) -> StepResult:
        url = ctx.config.web_login_url
        if not url:
            return StepResult(self.step_id, SATISFIED, "(no web login configured)")

        browser = ctx.tools.browser
        if not browser.is_available():
            raise StepFailure(f"{browser.name} not found; cannot open {url}")

        logger.info("Opening %s in %s...", url, browser.name)
        try:
            browser.open(url)
        except CommandError as e:
            raise StepFailure(f"could not open {url}: {e}") from e

        ctx.tools.prompter.wait_for_confirmation(
            f"Please log in at {url} in {browser.name} with the demo account."
        )
        return StepResult(self.step_id, CHANGED, "web authentication confirmed")
