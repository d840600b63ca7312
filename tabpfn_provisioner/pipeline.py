from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .config import Config
from .context import ProvisionContext

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent provisioning step."""

    step_id: str
    # What the step does, used in skip messages.
    label: str
    # Environment flag gating the step; None means it always runs.
    flag: Optional[str]

    def enabled(self, config: Config) -> bool:
        ...

    def run(self, ctx: ProvisionContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    skipped_steps: List[str]


def run_pipeline(*, ctx: ProvisionContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps strictly in order; the first failure ends the run."""

    ran: List[str] = []
    skipped: List[str] = []

    for step in steps:
        if not step.enabled(ctx.config):
            logger.info(
                "Skipping %s (%s=%s).", step.label, step.flag, ctx.config.flag_value(step.flag or "")
            )
            skipped.append(step.step_id)
            continue

        logger.debug("Running step %s", step.step_id)
        step.run(ctx)
        ran.append(step.step_id)

    return PipelineResult(ran_steps=ran, skipped_steps=skipped)
