from __future__ import annotations

import logging
from pathlib import Path

from ..context import SetupCtx
from ..errors import StepFailure
from ..pipeline import CHANGED, SATISFIED, StepResult

logger = logging.getLogger(__name__)

SENTINEL = "# Setup-script-configured=true"


def _append_block(path: Path, sentinel: str, settings: str, *, dry_run: bool) -> None:
    if dry_run:
        logger.info("Would append %d settings lines to %s", len(settings.splitlines()), str(path))
        return
    path.parent.mkdir(parents=True, exist_ok=True)

    # The sentinel must start its own line.
    needs_newline = False
    if path.exists() and path.stat().st_size > 0:
        with path.open("rb") as f:
            f.seek(-1, 2)
            needs_newline = f.read(1) != b"\n"

    body = settings.rstrip("\n")
    block = ("\n" if needs_newline else "") + sentinel + "\n" + (body + "\n" if body else "")
    with path.open("a", encoding="utf-8") as f:
        f.write(block)


class MediaPlayerSettingsStep:
    step_id = "30_media_player_settings"

    def run(self, ctx: SetupCtx) -> StepResult:
        path = ctx.profile.media_prefs_path

        if ctx.prober.is_config_marked(path, SENTINEL):
            return StepResult(self.step_id, SATISFIED, f"(settings already present in {path})")

        # VLC rewrites its preferences on exit.
        ctx.tools.processes.stop(ctx.profile.media_process_name)

        try:
            _append_block(path, SENTINEL, ctx.config.media_player_settings, dry_run=ctx.dry_run)
        except OSError as e:
            raise StepFailure(f"could not update {path}: {e}") from e

        return StepResult(self.step_id, CHANGED, "media player settings configured - please restart VLC")
