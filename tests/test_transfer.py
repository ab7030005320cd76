from pathlib import Path

import pytest

from simpledot_installer.errors import TransferError
from simpledot_installer.lib.sync import FileTransferSpec, rsync_argv
from simpledot_installer.steps.step_30_transfer_files import TransferOutcome

from fakes import FakeSynchronizer


def _checkout(home: Path) -> None:
    repo = home / "simple-dot"
    (repo / ".git").mkdir(parents=True)
    (repo / ".config").mkdir()
    (repo / ".config/picom.conf").write_text("new")
    (repo / "README.md").write_text("readme")
    (repo / "LICENSE").write_text("GPL")


def test_copy_merges_without_deleting_existing_files(make_workflow, home: Path):
    """Scenario: unrelated files already in home survive the copy"""
    _checkout(home)
    (home / ".config").mkdir()
    (home / ".config/unrelated.conf").write_text("keep me")
    workflow, _, _ = make_workflow(["y"])

    assert workflow.transfer_files() is TransferOutcome.COPIED

    assert (home / ".config/unrelated.conf").read_text() == "keep me"
    assert (home / ".config/picom.conf").read_text() == "new"
    assert not (home / "README.md").exists()
    assert (home / ".config/LICENSE-SIMPLE-DOT").read_text() == "GPL"


def test_declined_copy_touches_nothing(make_workflow, home: Path):
    """Scenario: transfer gate declined"""
    _checkout(home)
    workflow, _, fakes = make_workflow(["n"])

    assert workflow.transfer_files() is TransferOutcome.ABORTED
    assert fakes["synchronizer"].specs == []
    assert not (home / ".config").exists()


def test_sync_failure_raises_transfer_error(make_workflow, home: Path):
    """Scenario: rsync exits non-zero"""
    _checkout(home)
    workflow, _, _ = make_workflow(["y"], synchronizer=FakeSynchronizer(fail_with=23))

    with pytest.raises(TransferError) as exc:
        workflow.transfer_files()
    assert exc.value.returncode == 23


def test_missing_license_is_fatal(make_workflow, home: Path):
    """Scenario: repository has no LICENSE to place"""
    _checkout(home)
    (home / "simple-dot/LICENSE").unlink()
    workflow, _, _ = make_workflow(["y"])

    with pytest.raises(TransferError):
        workflow.transfer_files()


def test_rsync_argv_is_a_non_destructive_merge(tmp_path: Path):
    spec = FileTransferSpec(
        source=tmp_path / "simple-dot",
        destination=tmp_path,
        exclusions=frozenset({".git", "README.md"}),
    )

    argv = rsync_argv(spec)

    assert argv[:2] == ["rsync", "-a"]
    assert "--exclude=.git" in argv
    assert "--exclude=README.md" in argv
    assert not any(a.startswith("--delete") for a in argv)
    assert argv[-2] == f"{tmp_path / 'simple-dot'}/"
    assert argv[-1] == str(tmp_path)
