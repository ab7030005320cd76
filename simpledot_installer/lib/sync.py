from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Protocol

from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileTransferSpec:
    source: Path
    destination: Path
    exclusions: FrozenSet[str] = field(default_factory=frozenset)


class FileSynchronizer(Protocol):
    def sync(self, spec: FileTransferSpec) -> None:
        ...


def rsync_argv(spec: FileTransferSpec) -> list[str]:
    """Build a non-destructive rsync merge (no --delete)."""

    argv = ["rsync", "-a"]
    for pattern in sorted(spec.exclusions):
        argv.append(f"--exclude={pattern}")
    # Trailing slash: copy the contents of source, not the directory itself.
    argv += [f"{str(spec.source).rstrip('/')}/", str(spec.destination)]
    return argv


class RsyncSynchronizer:
    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def sync(self, spec: FileTransferSpec) -> None:
        run_cmd(rsync_argv(spec), dry_run=self.dry_run)
        logger.info("Synchronized %s -> %s (%d exclusions)", spec.source, spec.destination, len(spec.exclusions))
