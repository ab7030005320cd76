from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List

from ..errors import IntegrationError, InstallerError, wrap_error
from ..lib.integrations import NEMO_TERMINAL, THUNAR_TERMINAL, IntegrationKind
from ..pipeline import Stage, StepResult, WorkflowContext
from ..prompt import ConfirmationPrompt

logger = logging.getLogger(__name__)

FILE_MANAGER_WARNING = (
    "WARNING: answering (y) has no effect unless {name} is installed, so install it before running this."
)


class IntegrationOutcome(str, Enum):
    APPLIED = "applied"
    DECLINED = "declined"


@dataclass(frozen=True)
class Integration:
    kind: IntegrationKind
    prompt: ConfirmationPrompt
    action: Callable[[], None]


def apply_optional_integration(ctx: WorkflowContext, integration: Integration) -> IntegrationOutcome:
    """Run one integration if the user accepts it.

    Declining costs nothing; a failure of an accepted integration raises
    IntegrationError and the remaining integrations never run.
    """

    if not ctx.prompter.confirm(integration.prompt):
        ctx.prompter.say()
        return IntegrationOutcome.DECLINED

    try:
        integration.action()
    except (InstallerError, OSError) as e:
        raise wrap_error(IntegrationError, f"{integration.kind.value} failed", e) from e
    ctx.prompter.say()
    return IntegrationOutcome.APPLIED


def build_integrations(ctx: WorkflowContext) -> List[Integration]:
    cfg = ctx.config
    tools = ctx.integrator
    terminal = cfg.terminal

    def change_shell() -> None:
        ctx.prompter.say(f"Setting the shell to {cfg.shell} shell...")
        tools.change_shell(cfg.shell)

    def refresh_font_cache() -> None:
        ctx.prompter.say("Running fc-cache...")
        tools.refresh_font_cache()

    def grub_theme() -> None:
        ctx.prompter.say("Changing GRUB theme...")
        tools.install_grub_theme(cfg.grub)

    def sddm_theme() -> None:
        ctx.prompter.say("Running SDDM theme installer...")
        tools.install_sddm_theme(cfg.sddm)

    return [
        Integration(
            IntegrationKind.FONT_CACHE,
            ConfirmationPrompt("Do you want to refresh the font cache?"),
            refresh_font_cache,
        ),
        Integration(
            IntegrationKind.SHELL,
            ConfirmationPrompt(f"Do you want to change the shell to {cfg.shell}?"),
            change_shell,
        ),
        Integration(
            IntegrationKind.GRUB_THEME,
            ConfirmationPrompt("Do you want to change the GRUB theme to custom by @xealea?"),
            grub_theme,
        ),
        Integration(
            IntegrationKind.SDDM_THEME,
            ConfirmationPrompt("Do you want to run the SDDM theme installer?"),
            sddm_theme,
        ),
        Integration(
            IntegrationKind.NEMO_TERMINAL,
            ConfirmationPrompt(
                f"Set (if used) Nemo file manager default terminal to {terminal}?",
                warning=FILE_MANAGER_WARNING.format(name="Nemo"),
            ),
            lambda: tools.set_default_terminal(NEMO_TERMINAL, terminal),
        ),
        Integration(
            IntegrationKind.THUNAR_TERMINAL,
            ConfirmationPrompt(
                f"Set (if used) Thunar default terminal to {terminal}?",
                warning=FILE_MANAGER_WARNING.format(name="Thunar"),
            ),
            lambda: tools.set_default_terminal(THUNAR_TERMINAL, terminal),
        ),
    ]


class IntegrationsStep:
    stage = Stage.OPTIONAL_INTEGRATIONS

    def run(self, ctx: WorkflowContext) -> StepResult:
        applied: List[str] = []
        for integration in build_integrations(ctx):
            outcome = apply_optional_integration(ctx, integration)
            ctx.record(f"integration:{integration.kind.value}", outcome.value)
            if outcome is IntegrationOutcome.APPLIED:
                applied.append(integration.kind.value)

        logger.info("Integrations applied: %s", ",".join(applied) or "none")
        return StepResult(outcome=f"applied={len(applied)}")
