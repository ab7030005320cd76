from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest

from simpledot_installer.config import InstallerConfig
from simpledot_installer.workflow import InstallerWorkflow

from fakes import (
    REMOTE_FILES,
    FakeDiskUsage,
    FakeExtractor,
    FakeIntegrator,
    FakeSynchronizer,
    FakeVcs,
    ScriptedPrompter,
)


@pytest.fixture
def home(tmp_path: Path) -> Path:
    h = tmp_path / "home"
    h.mkdir()
    return h


@pytest.fixture
def config(home: Path) -> InstallerConfig:
    return InstallerConfig(raw={"home": str(home)})


@pytest.fixture
def make_workflow(config: InstallerConfig):
    """Build a workflow wired to fakes; returns (workflow, prompter, fakes)."""

    def _make(answers: List[str], *, cfg: Optional[InstallerConfig] = None, **fakes):
        fakes.setdefault("vcs", FakeVcs(REMOTE_FILES))
        fakes.setdefault("synchronizer", FakeSynchronizer())
        fakes.setdefault("extractor", FakeExtractor())
        fakes.setdefault("disk_usage", FakeDiskUsage())
        fakes.setdefault("integrator", FakeIntegrator())
        prompter = ScriptedPrompter(answers)
        workflow = InstallerWorkflow(cfg or config, prompter=prompter, **fakes)
        return workflow, prompter, fakes

    return _make
