from __future__ import annotations

import logging
from typing import Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


def privileged_cmd(
    sudo: str,
    argv: Sequence[str],
    *,
    input_text: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command as root through the escalation tool (sudo, doas, ...).

    Always interactive so the escalation tool can ask for credentials.
    """

    return run_cmd([sudo, *argv], input_text=input_text, interactive=True, dry_run=dry_run)


def privileged_copy(
    sudo: str,
    src: str,
    dst: str,
    *,
    recursive: bool = False,
    dry_run: bool = False,
) -> None:
    argv = ["cp"]
    if recursive:
        argv.append("-r")
    privileged_cmd(sudo, [*argv, src, dst], dry_run=dry_run)
    logger.info("Copied %s -> %s", src, dst)
