from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Protocol, Sequence

from .config import InstallerConfig
from .lib.archive import ArchiveExtractor
from .lib.integrations import SystemIntegrator
from .lib.sizes import DiskUsage
from .lib.sync import FileSynchronizer
from .lib.vcs import VersionControlClient
from .prompt import Prompter

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    REPOSITORY_CHECK = "repository_check"
    SIZE_REPORT = "size_report"
    FILE_TRANSFER_GATE = "file_transfer_gate"
    ARCHIVE_EXTRACTION = "archive_extraction"
    OPTIONAL_INTEGRATIONS = "optional_integrations"
    DONE = "done"
    ABORTED = "aborted"


# Forward edges, taken when a step lets the run proceed.
TRANSITIONS: Dict[Stage, Stage] = {
    Stage.REPOSITORY_CHECK: Stage.SIZE_REPORT,
    Stage.SIZE_REPORT: Stage.FILE_TRANSFER_GATE,
    Stage.FILE_TRANSFER_GATE: Stage.ARCHIVE_EXTRACTION,
    Stage.ARCHIVE_EXTRACTION: Stage.OPTIONAL_INTEGRATIONS,
    Stage.OPTIONAL_INTEGRATIONS: Stage.DONE,
}

# Stages with an edge to ABORTED: declining their prompt ends the run.
ABORT_GATES = frozenset({Stage.REPOSITORY_CHECK, Stage.FILE_TRANSFER_GATE})

TERMINAL_STAGES = frozenset({Stage.DONE, Stage.ABORTED})


@dataclass
class WorkflowContext:
    """Everything a step may touch: config, the prompter and the tools."""

    config: InstallerConfig
    prompter: Prompter
    vcs: VersionControlClient
    synchronizer: FileSynchronizer
    extractor: ArchiveExtractor
    disk_usage: DiskUsage
    integrator: SystemIntegrator
    outcomes: Dict[str, str] = field(default_factory=dict)

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def record(self, key: str, outcome: str) -> None:
        self.outcomes[key] = outcome


@dataclass(frozen=True)
class StepResult:
    outcome: str
    proceed: bool = True


class Step(Protocol):
    """One stage of the workflow."""

    stage: Stage

    def run(self, ctx: WorkflowContext) -> StepResult:
        ...


@dataclass(frozen=True)
class WorkflowResult:
    final_stage: Stage
    outcomes: Dict[str, str]
    ran_stages: List[str]

    @property
    def aborted(self) -> bool:
        return self.final_stage is Stage.ABORTED


def run_pipeline(*, ctx: WorkflowContext, steps: Sequence[Step]) -> WorkflowResult:
    """Walk the stage graph from REPOSITORY_CHECK to a terminal stage.

    Exceptions raised by a step propagate untouched; nothing is rolled back.
    """

    by_stage = {step.stage: step for step in steps}
    ran: List[str] = []
    stage = Stage.REPOSITORY_CHECK

    while stage not in TERMINAL_STAGES:
        step = by_stage.get(stage)
        if step is None:
            logger.info("No step registered for %s", stage.value)
            stage = TRANSITIONS[stage]
            continue

        logger.info("Running step %s", stage.value)
        result = step.run(ctx)
        ctx.record(stage.value, result.outcome)
        ran.append(stage.value)

        if result.proceed:
            stage = TRANSITIONS[stage]
        elif stage in ABORT_GATES:
            logger.info("Aborted at %s (%s)", stage.value, result.outcome)
            stage = Stage.ABORTED
        else:
            raise RuntimeError(f"Step {stage.value} cannot abort the workflow")

    return WorkflowResult(final_stage=stage, outcomes=dict(ctx.outcomes), ran_stages=ran)
