from __future__ import annotations

import logging
import shutil
from enum import Enum

from ..errors import InstallerError, TransferError, wrap_error
from ..lib.sync import FileTransferSpec
from ..pipeline import Stage, StepResult, WorkflowContext
from ..prompt import ConfirmationPrompt

logger = logging.getLogger(__name__)

COPY_PROMPT = ConfirmationPrompt("Do you want to copy the dotfiles?")


class TransferOutcome(str, Enum):
    COPIED = "copied"
    ABORTED = "aborted"


def place_license(ctx: WorkflowContext) -> None:
    src = ctx.config.license_source
    dst = ctx.config.license_target
    if ctx.dry_run:
        logger.info("Would copy %s -> %s", src, dst)
        return
    if not src.is_file():
        raise TransferError(f"License file missing after copy: {src}")
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)
    except OSError as e:
        raise wrap_error(TransferError, f"Placing license at {dst} failed", e) from e
    logger.info("License placed at %s", dst)


def transfer_files(ctx: WorkflowContext, spec: FileTransferSpec) -> TransferOutcome:
    """Merge the checkout into the home directory after confirmation.

    Nothing is touched when the prompt is declined.
    """

    if not ctx.prompter.confirm(COPY_PROMPT):
        return TransferOutcome.ABORTED

    try:
        ctx.synchronizer.sync(spec)
    except (InstallerError, OSError) as e:
        raise wrap_error(TransferError, f"Copying {spec.source} to {spec.destination} failed", e) from e

    place_license(ctx)
    ctx.prompter.say("Copying completed successfully!")
    ctx.prompter.say()
    return TransferOutcome.COPIED


class TransferFilesStep:
    stage = Stage.FILE_TRANSFER_GATE

    def run(self, ctx: WorkflowContext) -> StepResult:
        outcome = transfer_files(ctx, ctx.config.transfer_spec)
        if outcome is TransferOutcome.ABORTED:
            ctx.prompter.say("Installation aborted. Exiting...")
            return StepResult(outcome=outcome.value, proceed=False)
        return StepResult(outcome=outcome.value)
