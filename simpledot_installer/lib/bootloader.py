from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .command import run_cmd
from .privilege import privileged_cmd, privileged_copy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GrubThemeSettings:
    theme_source: Path
    share_dir: str = "/usr/share/"
    theme_line: str = 'GRUB_THEME="/usr/share/grub/themes/simpleboot/theme.txt"'
    default_file: str = "/etc/default/grub"
    grub_cfg: str = "/boot/grub/grub.cfg"


def grub_theme_configured(default_contents: str, theme_line: str) -> bool:
    """True if theme_line already occurs in /etc/default/grub."""

    return theme_line in default_contents


def _read_default_file(path: str, *, sudo: str, dry_run: bool) -> str:
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except FileNotFoundError:
        if not dry_run:
            raise
        logger.info("%s missing; treating as empty in dry run", path)
        return ""
    except PermissionError:
        r = run_cmd([sudo, "cat", path], interactive=False, dry_run=dry_run)
        return r.stdout


def install_grub_theme(
    settings: GrubThemeSettings,
    *,
    sudo: str = "sudo",
    dry_run: bool = False,
) -> None:
    """Copy the theme, point GRUB_THEME at it and regenerate grub.cfg."""

    privileged_copy(sudo, str(settings.theme_source), settings.share_dir, recursive=True, dry_run=dry_run)

    contents = _read_default_file(settings.default_file, sudo=sudo, dry_run=dry_run)
    if grub_theme_configured(contents, settings.theme_line):
        logger.info("GRUB_THEME already set in %s", settings.default_file)
    else:
        privileged_cmd(
            sudo,
            ["tee", "-a", settings.default_file],
            input_text=settings.theme_line + "\n",
            dry_run=dry_run,
        )
        logger.info("Appended %s to %s", settings.theme_line, settings.default_file)

    privileged_cmd(sudo, ["grub-mkconfig", "-o", settings.grub_cfg], dry_run=dry_run)
    logger.info("GRUB theme installed")
