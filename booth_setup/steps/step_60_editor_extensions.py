from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import StepFailure
from ..pipeline import SATISFIED, StepResult
from .common import install_each

logger = logging.getLogger(__name__)


class EditorExtensionsStep:
    def __init__(self, editor_key: str) -> None:
        self.editor_key = editor_key
        self.step_id = f"60_editor_extensions_{editor_key}"

    def run(self, ctx: SetupCtx) -> StepResult:
        variant = ctx.profile.editor(self.editor_key)
        ids = ctx.config.editor_extension_ids
        if not ids:
            return StepResult(self.step_id, SATISFIED, "(no editor extensions configured)")

        editor = ctx.tools.editors[self.editor_key]
        if not editor.is_available():
            raise StepFailure(f"{variant.label} binary not found at {variant.cli_path}")

        logger.info("Installing %s extensions...", variant.label)
        return install_each(
            self.step_id,
            ids,
            editor.list_extensions(),
            editor.install_extension,
            what=f"{variant.label} extension",
        )
