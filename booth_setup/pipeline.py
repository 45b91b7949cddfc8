from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Protocol, Sequence, Tuple

from .context import SetupCtx
from .errors import StepFailure
from .lib.platforms import MANDATORY_APPS

logger = logging.getLogger(__name__)

SATISFIED = "satisfied"
CHANGED = "changed"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    step_id: str
    status: str
    detail: str = ""
    warnings: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """The step's target state is in place."""
        return self.status in (SATISFIED, CHANGED) and not self.warnings


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: SetupCtx) -> StepResult:
        ...


@dataclass(frozen=True)
class PipelineResult:
    results: List[StepResult]

    def by_id(self, step_id: str) -> StepResult:
        for r in self.results:
            if r.step_id == step_id:
                return r
        raise KeyError(step_id)

    @property
    def failed_steps(self) -> List[str]:
        return [r.step_id for r in self.results if r.status == FAILED]


@dataclass(frozen=True)
class VerificationReport:
    checked: List[str]
    missing: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing


@dataclass(frozen=True)
class RunSummary:
    pipeline: PipelineResult
    verification: VerificationReport

    @property
    def ok(self) -> bool:
        return self.verification.ok


def _report(result: StepResult) -> None:
    for w in result.warnings:
        logger.warning("[%s] %s", result.step_id, w)
    if result.status == SATISFIED:
        logger.info("[%s] already satisfied %s", result.step_id, result.detail)
    elif result.status == CHANGED:
        logger.info("[%s] done %s", result.step_id, result.detail)
    elif result.status == SKIPPED:
        logger.warning("[%s] skipped: %s", result.step_id, result.detail)
    else:
        logger.error("[%s] failed: %s", result.step_id, result.detail)


def run_pipeline(*, ctx: SetupCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run every step in order. A failing step never stops the run."""

    results: List[StepResult] = []

    for step in steps:
        logger.info("Running step %s", step.step_id)
        try:
            result = step.run(ctx)
        except StepFailure as e:
            result = StepResult(step.step_id, FAILED, str(e))
        except Exception as e:
            logger.exception("Step %s raised", step.step_id)
            result = StepResult(step.step_id, FAILED, f"{type(e).__name__}: {e}")
        _report(result)
        results.append(result)

    return PipelineResult(results=results)


def verify_installation(ctx: SetupCtx) -> VerificationReport:
    """Re-probe the mandatory applications after all steps ran."""

    apps = [ctx.profile.app(k) for k in MANDATORY_APPS]
    missing = ctx.prober.missing_applications(apps)
    return VerificationReport(checked=[a.name for a in apps], missing=[a.name for a in missing])
