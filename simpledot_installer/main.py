from __future__ import annotations

import argparse
import logging
from typing import Optional

from .config import InstallerConfig, load_config
from .errors import InstallerError
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import WorkflowResult
from .prompt import Prompter
from .workflow import InstallerWorkflow

logger = logging.getLogger(__name__)

INTERRUPTED_RETURNCODE = 130


def run(
    *,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    dry_run: bool = False,
    prompter: Optional[Prompter] = None,
) -> WorkflowResult:
    """Run the interactive installer once."""

    actual_log_path = configure_logging(log_path=log_path)
    logger.info("Log file: %s", actual_log_path)

    config = load_config(config_path) if config_path else InstallerConfig()
    if dry_run:
        config = config.with_overrides(dry_run=True)

    workflow = InstallerWorkflow(config, prompter=prompter)
    try:
        return workflow.run()
    except InstallerError:
        logger.exception("Installer failed")
        raise


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="simpledot-install",
        description="Install or update the simple-dot dotfiles.",
    )
    p.add_argument("--config", default=None, help="YAML file overriding installer defaults")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--dry-run", action="store_true", help="Log commands instead of running them")

    args = p.parse_args(argv)

    try:
        run(config_path=args.config, log_path=args.log, dry_run=bool(args.dry_run))
    except InstallerError as e:
        return e.returncode or 1
    except (OSError, ValueError) as e:
        logger.error("Cannot start installer: %s", e)
        return 1
    except KeyboardInterrupt:
        print()
        logger.warning("Interrupted")
        return INTERRUPTED_RETURNCODE
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
