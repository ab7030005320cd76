from __future__ import annotations

import logging
from enum import Enum

from ..errors import InstallerError, RepositoryError, wrap_error
from ..lib.vcs import RepositorySource
from ..pipeline import Stage, StepResult, WorkflowContext
from ..prompt import ConfirmationPrompt

logger = logging.getLogger(__name__)

UPDATE_PROMPT = ConfirmationPrompt("Do you want to update the dotfiles repository?")
CLONE_PROMPT = ConfirmationPrompt("Do you want to clone the dotfiles repository?")


class RepositoryOutcome(str, Enum):
    CLONED = "cloned"
    UPDATED = "updated"
    SKIPPED = "skipped"


def ensure_repository(ctx: WorkflowContext, source: RepositorySource) -> RepositoryOutcome:
    """Offer to update an existing checkout, or to clone a fresh one.

    Only one of the two prompts is ever shown. A failing git command raises
    RepositoryError.
    """

    path = source.local_path
    if ctx.vcs.is_checkout(path):
        ctx.prompter.say(f"The dotfiles repository is already available in {path}.")
        if not ctx.prompter.confirm(UPDATE_PROMPT):
            return RepositoryOutcome.SKIPPED
        ctx.prompter.say("Updating the dotfiles repository...")
        try:
            ctx.vcs.pull(path)
        except (InstallerError, OSError) as e:
            raise wrap_error(RepositoryError, f"Updating {path} failed", e) from e
        return RepositoryOutcome.UPDATED

    if not ctx.prompter.confirm(CLONE_PROMPT):
        return RepositoryOutcome.SKIPPED
    try:
        ctx.vcs.clone(source)
    except (InstallerError, OSError) as e:
        raise wrap_error(RepositoryError, f"Cloning {source.url} failed", e) from e
    return RepositoryOutcome.CLONED


class RepositoryStep:
    stage = Stage.REPOSITORY_CHECK

    def run(self, ctx: WorkflowContext) -> StepResult:
        outcome = ensure_repository(ctx, ctx.config.repository)
        if outcome is RepositoryOutcome.SKIPPED:
            ctx.prompter.say("Installation aborted. Exiting...")
            return StepResult(outcome=outcome.value, proceed=False)

        logger.info("Repository %s (%s)", outcome.value, ctx.config.destination)
        return StepResult(outcome=outcome.value)
