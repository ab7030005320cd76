from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveBundle:
    archive_path: Path
    extract_to: Path
    label: str = ""

    @property
    def name(self) -> str:
        return self.label or self.archive_path.name


class ArchiveExtractor(Protocol):
    def extract(self, bundle: ArchiveBundle) -> None:
        ...


class TarExtractor:
    """Extract with tar; compression is detected by tar itself."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def extract(self, bundle: ArchiveBundle) -> None:
        if not self.dry_run:
            bundle.extract_to.mkdir(parents=True, exist_ok=True)
        run_cmd(
            ["tar", "-xf", str(bundle.archive_path), "-C", str(bundle.extract_to)],
            dry_run=self.dry_run,
        )
