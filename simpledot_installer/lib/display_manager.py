from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .command import run_cmd
from .privilege import privileged_cmd, privileged_copy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SddmThemeSettings:
    theme_source: Path
    config_source: Path
    share_dir: str = "/usr/share/"
    theme_dir: str = "/usr/share/sddm/themes/decay"
    config_dest: str = "/etc/"
    config_path: str = "/etc/sddm.conf"
    preview: bool = True


def install_sddm_theme(
    settings: SddmThemeSettings,
    *,
    sudo: str = "sudo",
    dry_run: bool = False,
) -> None:
    """Install the SDDM theme and its config, then restart SDDM on it."""

    # Trailing slash copies the sddm/ tree itself under share_dir.
    privileged_copy(sudo, f"{str(settings.theme_source).rstrip('/')}/", settings.share_dir, recursive=True, dry_run=dry_run)

    if settings.preview:
        # Blocks until the preview window is closed.
        run_cmd(["sddm-greeter", "--theme", settings.theme_dir], interactive=True, dry_run=dry_run)

    privileged_cmd(sudo, ["sddmthemeinstaller", "-i", settings.theme_dir], dry_run=dry_run)
    privileged_copy(sudo, str(settings.config_source), settings.config_dest, dry_run=dry_run)
    privileged_cmd(sudo, ["sddm", settings.config_path], dry_run=dry_run)
    logger.info("SDDM theme installed (%s)", settings.theme_dir)
