from __future__ import annotations

import logging

from ..lib.sizes import report_sizes
from ..pipeline import Stage, StepResult, WorkflowContext

logger = logging.getLogger(__name__)


class SizeReportStep:
    stage = Stage.SIZE_REPORT

    def run(self, ctx: WorkflowContext) -> StepResult:
        ctx.prompter.say("Folder/File sizes:")
        ctx.prompter.say("------------------")

        total = 0
        missing = 0
        for entry in report_sizes(ctx.config.size_report_paths, ctx.disk_usage):
            total += 1
            if entry.warning is not None:
                missing += 1
                logger.warning("%s", entry.warning)
            ctx.prompter.say(entry.format())

        return StepResult(outcome=f"reported={total} missing={missing}")
