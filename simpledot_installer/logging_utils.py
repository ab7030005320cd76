from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "~/.cache/simple-dot/install.log"

FILE_HANDLER_NAME = "simpledot-file"
CONSOLE_HANDLER_NAME = "simpledot-console"


def _find_handler(logger: logging.Logger, name: str) -> Optional[logging.Handler]:
    return next((h for h in logger.handlers if h.get_name() == name), None)


def _open_log_file(requested: str) -> logging.FileHandler:
    """Open the requested log file, or one in the working directory if that fails."""

    try:
        Path(os.path.dirname(requested) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(requested)
    except OSError:
        return logging.FileHandler(str(Path.cwd() / "simple-dot-install.log"))


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
    console_level: int = logging.WARNING,
) -> str:
    """Attach the installer's handlers to the root logger.

    Every command and decision goes to the log file; the console only gets
    warnings and errors so it does not drown the prompts. Calling this again
    keeps the handlers already installed. Returns the log file actually used.
    """

    root = logging.getLogger()
    root.setLevel(level)

    existing = _find_handler(root, FILE_HANDLER_NAME)
    if isinstance(existing, logging.FileHandler):
        return existing.baseFilename

    requested = os.path.expanduser(log_path)
    file_handler = _open_log_file(requested)
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    root.addHandler(file_handler)

    if also_console and _find_handler(root, CONSOLE_HANDLER_NAME) is None:
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER_NAME)
        console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        console.setLevel(console_level)
        root.addHandler(console)

    chosen_path = file_handler.baseFilename
    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", requested, chosen_path
    )
    return chosen_path
