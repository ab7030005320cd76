from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from ..errors import CommandError
from .bootloader import GrubThemeSettings, install_grub_theme
from .command import NOT_FOUND_RETURNCODE, run_cmd
from .display_manager import SddmThemeSettings, install_sddm_theme

logger = logging.getLogger(__name__)


class IntegrationKind(str, Enum):
    FONT_CACHE = "font_cache"
    SHELL = "shell"
    GRUB_THEME = "grub_theme"
    SDDM_THEME = "sddm_theme"
    NEMO_TERMINAL = "nemo_terminal"
    THUNAR_TERMINAL = "thunar_terminal"


@dataclass(frozen=True)
class TerminalSetting:
    """A gsettings key naming a file manager's default terminal."""

    schema: str
    key: str = "exec"


NEMO_TERMINAL = TerminalSetting(schema="org.cinnamon.desktop.default-applications.terminal")
THUNAR_TERMINAL = TerminalSetting(schema="org.xfce.Terminal.Settings")


class SystemIntegrator(Protocol):
    def refresh_font_cache(self) -> None:
        ...

    def change_shell(self, shell: str) -> None:
        ...

    def install_grub_theme(self, settings: GrubThemeSettings) -> None:
        ...

    def install_sddm_theme(self, settings: SddmThemeSettings) -> None:
        ...

    def set_default_terminal(self, setting: TerminalSetting, terminal: str) -> None:
        ...


class SystemTools:
    """SystemIntegrator backed by fc-cache, chsh, gsettings, grub and sddm tooling."""

    def __init__(self, *, sudo: str = "sudo", dry_run: bool = False) -> None:
        self.sudo = sudo
        self.dry_run = dry_run

    def refresh_font_cache(self) -> None:
        run_cmd(["fc-cache", "-r"], dry_run=self.dry_run)

    def change_shell(self, shell: str) -> None:
        shell_path = shell if shell.startswith("/") else shutil.which(shell)
        if not shell_path and self.dry_run:
            logger.warning("%s not found; would fail outside dry run", shell)
            shell_path = shell
        if not shell_path:
            raise CommandError(["command", "-v", shell], NOT_FOUND_RETURNCODE, f"{shell}: not found")
        run_cmd(["chsh", "-s", shell_path], interactive=True, dry_run=self.dry_run)
        logger.info("Login shell set to %s", shell_path)

    def install_grub_theme(self, settings: GrubThemeSettings) -> None:
        install_grub_theme(settings, sudo=self.sudo, dry_run=self.dry_run)

    def install_sddm_theme(self, settings: SddmThemeSettings) -> None:
        install_sddm_theme(settings, sudo=self.sudo, dry_run=self.dry_run)

    def set_default_terminal(self, setting: TerminalSetting, terminal: str) -> None:
        run_cmd(["gsettings", "set", setting.schema, setting.key, terminal], dry_run=self.dry_run)
        logger.info("Default terminal for %s set to %s", setting.schema, terminal)
