from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)

# Shell convention for "command not found".
NOT_FOUND_RETURNCODE = 127


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    interactive: bool = False,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - Captures stdout/stderr unless interactive is set; interactive commands
      inherit the terminal so sudo/chsh can ask for a password.
    - A missing executable is reported like a shell would (returncode 127).
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    capture = {} if interactive else {"stdout": subprocess.PIPE, "stderr": subprocess.PIPE}
    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
            **capture,
        )
    except FileNotFoundError as e:
        if check:
            raise CommandError(argv_list, NOT_FOUND_RETURNCODE, str(e)) from e
        return CmdResult(argv=argv_list, returncode=NOT_FOUND_RETURNCODE, stdout="", stderr=str(e))

    stdout = p.stdout or ""
    stderr = p.stderr or ""
    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if check and p.returncode != 0:
        raise CommandError(argv_list, p.returncode, stderr)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)
