from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Protocol

from ..errors import MissingPathWarning
from .command import run_cmd

logger = logging.getLogger(__name__)

NOT_FOUND_LABEL = "not found"
UNKNOWN_LABEL = "?"
DRY_RUN_LABEL = "-"


@dataclass(frozen=True)
class SizeEntry:
    size_label: str
    name: str
    warning: Optional[MissingPathWarning] = None

    def format(self) -> str:
        return f"{self.size_label:<10} {self.name}"


class DiskUsage(Protocol):
    def measure(self, path: Path) -> str:
        """Return a human-readable size label for an existing path."""
        ...


class DuDiskUsage:
    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def measure(self, path: Path) -> str:
        if self.dry_run:
            return DRY_RUN_LABEL
        # du exits non-zero on unreadable subtrees but still prints a total.
        r = run_cmd(["du", "-sh", str(path)], check=False)
        fields = r.stdout.split()
        return fields[0] if fields else UNKNOWN_LABEL


def _exists(path: Path) -> bool:
    # Unreadable parents and over-long names count as missing.
    try:
        return path.exists()
    except OSError as e:
        logger.debug("exists(%s) failed: %s", path, e)
        return False


def report_sizes(paths: Iterable[Path], usage: DiskUsage) -> Iterator[SizeEntry]:
    """Yield one SizeEntry per path, lazily. Never raises."""

    for path in paths:
        name = path.name or str(path)
        if not _exists(path):
            yield SizeEntry(size_label=NOT_FOUND_LABEL, name=name, warning=MissingPathWarning(str(path)))
            continue
        try:
            label = usage.measure(path)
        except Exception as e:
            logger.warning("Could not measure %s: %s", path, e)
            label = UNKNOWN_LABEL
        yield SizeEntry(size_label=label, name=name)
