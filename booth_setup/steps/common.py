from __future__ import annotations

import logging
from typing import Callable, List, Sequence, Set

from ..errors import CommandError
from ..pipeline import CHANGED, FAILED, SATISFIED, StepResult

logger = logging.getLogger(__name__)


def install_each(
    step_id: str,
    ids: Sequence[str],
    installed: Set[str],
    install: Callable[[str], None],
    *,
    what: str,
) -> StepResult:
    """Install every id not already in `installed` (compared lower-cased).

    One failing id is recorded as a warning and the loop moves on.
    """

    added: List[str] = []
    warnings: List[str] = []
    seen = {i.lower() for i in installed}

    for ext in ids:
        if ext.lower() in seen:
            logger.debug("%s %s already installed", what, ext)
            continue
        try:
            install(ext)
        except CommandError as e:
            warnings.append(f"could not install {what} {ext}: {e.stderr.strip() or e}")
            continue
        seen.add(ext.lower())
        added.append(ext)

    if not added and not warnings:
        return StepResult(step_id, SATISFIED, f"(all {len(ids)} {what}s present)")
    if not added:
        return StepResult(step_id, FAILED, f"no {what}s could be installed", tuple(warnings))
    return StepResult(step_id, CHANGED, f"installed {what}s: {', '.join(added)}", tuple(warnings))
