from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

YES_ANSWERS = {"y", "yes"}
NO_ANSWERS = {"n", "no"}


@dataclass(frozen=True)
class ConfirmationPrompt:
    question: str
    default_deny: bool = True
    warning: Optional[str] = None

    def render(self) -> str:
        hint = "y/N" if self.default_deny else "Y/n"
        return f"{self.question} ({hint}) "


class Prompter:
    """Asks y/n questions on the terminal.

    Anything other than an explicit yes/no falls back to the prompt's
    default; end of input counts as the default too.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.input_fn = input_fn
        self.output_fn = output_fn

    def confirm(self, prompt: ConfirmationPrompt) -> bool:
        if prompt.warning:
            self.output_fn(prompt.warning)
        try:
            answer = self.input_fn(prompt.render()).strip().lower()
        except EOFError:
            self.output_fn("")
            answer = ""

        if answer in YES_ANSWERS:
            accepted = True
        elif answer in NO_ANSWERS:
            accepted = False
        else:
            accepted = not prompt.default_deny

        logger.info("Prompt %r -> %s", prompt.question, "yes" if accepted else "no")
        return accepted

    def say(self, message: str = "") -> None:
        self.output_fn(message)
