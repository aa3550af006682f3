from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .bootstrap_config import BootstrapConfig

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single stage of the bootstrap run."""

    step_id: str

    def run(self, config: BootstrapConfig) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_pipeline(
    *,
    config: BootstrapConfig,
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order, optionally limited to the range [start_at, stop_after]."""

    known = [s.step_id for s in steps]
    for name, value in (("start_at", start_at), ("stop_after", stop_after)):
        if value is not None and value not in known:
            raise ValueError(f"Unknown {name} step {value!r} (known: {', '.join(known)})")

    ran: List[str] = []
    started = start_at is None

    for step in steps:
        if not started:
            if step.step_id == start_at:
                started = True
            else:
                logger.debug("Skipping step %s (before %s)", step.step_id, start_at)
                continue

        logger.debug("Running step %s", step.step_id)
        step.run(config)
        ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    return PipelineResult(ran_steps=ran)
