from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import StepFailure
from ..lib.editor import THEME_KEY, read_settings, write_settings
from ..pipeline import CHANGED, SATISFIED, StepResult

logger = logging.getLogger(__name__)


class EditorThemeStep:
    """Set the color theme, keeping every other key of settings.json."""

    def __init__(self, editor_key: str) -> None:
        self.editor_key = editor_key
        self.step_id = f"70_editor_theme_{editor_key}"

    def run(self, ctx: SetupCtx) -> StepResult:
        variant = ctx.profile.editor(self.editor_key)
        theme = ctx.config.editor_theme
        path = variant.settings_path

        try:
            settings = read_settings(path)
        except (OSError, ValueError) as e:
            raise StepFailure(f"{path} could not be read as JSON; theme not changed ({e})") from e

        if settings.get(THEME_KEY) == theme:
            return StepResult(self.step_id, SATISFIED, f"({variant.label} theme is already {theme})")

        logger.info("Setting %s theme...", variant.label)
        settings[THEME_KEY] = theme
        try:
            write_settings(path, settings, dry_run=ctx.dry_run)
        except OSError as e:
            raise StepFailure(f"could not write {path}: {e}") from e
        return StepResult(self.step_id, CHANGED, f"{variant.label} theme set to {theme}")
