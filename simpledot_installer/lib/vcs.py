from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositorySource:
    url: str
    local_path: Path


class VersionControlClient(Protocol):
    def is_checkout(self, path: Path) -> bool:
        ...

    def clone(self, source: RepositorySource) -> None:
        ...

    def pull(self, path: Path) -> None:
        ...


class GitClient:
    """git over HTTPS. Failures surface as CommandError from run_cmd."""

    def __init__(self, *, depth: int = 1, dry_run: bool = False) -> None:
        self.depth = depth
        self.dry_run = dry_run

    def is_checkout(self, path: Path) -> bool:
        return path.is_dir() and (path / ".git").is_dir()

    def clone(self, source: RepositorySource) -> None:
        argv = ["git", "clone"]
        if self.depth:
            argv += ["--depth", str(self.depth)]
        argv += [source.url, str(source.local_path)]
        # Interactive so git can show progress and ask for credentials.
        run_cmd(argv, interactive=True, dry_run=self.dry_run)
        logger.info("Cloned %s into %s", source.url, source.local_path)

    def pull(self, path: Path) -> None:
        run_cmd(["git", "-C", str(path), "pull"], interactive=True, dry_run=self.dry_run)
        logger.info("Updated %s", path)
