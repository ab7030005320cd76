import shutil
import tarfile
from pathlib import Path

import pytest

from simpledot_installer.errors import ArchiveError
from simpledot_installer.lib.archive import ArchiveBundle, TarExtractor
from simpledot_installer.steps.step_40_extract_bundles import ExtractBundlesStep, ExtractOutcome

from fakes import FakeExtractor


def _place_archives(home: Path) -> None:
    for rel in (".fonts/glyph-font.tar.xz", ".themes/decay.tar.xz", ".icons/adecay.tar.xz", ".icons/xdecay.tar.xz"):
        p = home / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"archive")


def test_extract_deletes_archive_after_success(make_workflow, home: Path):
    """Scenario: archive extracted then removed"""
    _place_archives(home)
    workflow, prompter, fakes = make_workflow([])
    bundle = workflow.config.bundles[0]

    assert workflow.extract_bundle(bundle) is ExtractOutcome.EXTRACTED
    assert not bundle.archive_path.exists()
    assert fakes["extractor"].extracted == [bundle]
    assert "Extracting fonts..." in prompter.lines


def test_extract_twice_is_a_no_op(make_workflow, home: Path):
    """Scenario: second extraction after the archive was deleted"""
    _place_archives(home)
    workflow, _, fakes = make_workflow([])
    bundle = workflow.config.bundles[1]

    workflow.extract_bundle(bundle)
    assert workflow.extract_bundle(bundle) is ExtractOutcome.SKIPPED
    assert len(fakes["extractor"].extracted) == 1


def test_failed_extraction_keeps_archive_and_earlier_bundles(make_workflow, home: Path):
    """Scenario: GTK theme extraction fails after fonts succeeded"""
    _place_archives(home)
    workflow, _, fakes = make_workflow([], extractor=FakeExtractor(fail_on="GTK theme"))

    with pytest.raises(ArchiveError) as exc:
        ExtractBundlesStep().run(workflow.ctx)

    assert exc.value.returncode == 2
    assert not (home / ".fonts/glyph-font.tar.xz").exists()
    assert (home / ".fonts/glyph-font.tar.xz.contents").exists()
    assert (home / ".themes/decay.tar.xz").exists()
    assert (home / ".icons/adecay.tar.xz").exists()
    assert [b.name for b in fakes["extractor"].extracted] == ["fonts"]


def test_step_counts_outcomes(make_workflow, home: Path):
    """Scenario: only some archives present"""
    _place_archives(home)
    (home / ".icons/xdecay.tar.xz").unlink()
    workflow, _, _ = make_workflow([])

    result = ExtractBundlesStep().run(workflow.ctx)

    assert result.outcome == "extracted=3 skipped=1"
    assert workflow.ctx.outcomes["bundle:cursor"] == "skipped"


def test_dry_run_keeps_archives(make_workflow, home: Path, config):
    """Scenario: dry run extracts nothing and deletes nothing"""
    _place_archives(home)
    workflow, _, _ = make_workflow([], cfg=config.with_overrides(dry_run=True), extractor=TarExtractor(dry_run=True))

    ExtractBundlesStep().run(workflow.ctx)

    assert (home / ".fonts/glyph-font.tar.xz").exists()
    assert (home / ".icons/xdecay.tar.xz").exists()


@pytest.mark.skipif(shutil.which("tar") is None, reason="tar not installed")
def test_tar_extractor_unpacks_real_archive(tmp_path: Path):
    payload = tmp_path / "decay"
    payload.mkdir()
    (payload / "index.theme").write_text("[Icon Theme]")
    archive = tmp_path / "decay.tar"
    with tarfile.open(archive, "w") as tf:
        tf.add(payload, arcname="decay")

    dest = tmp_path / "themes"
    TarExtractor().extract(ArchiveBundle(archive_path=archive, extract_to=dest))

    assert (dest / "decay/index.theme").read_text() == "[Icon Theme]"


@pytest.mark.skipif(shutil.which("tar") is None, reason="tar not installed")
def test_tar_extractor_failure_raises(make_workflow, home: Path):
    """Scenario: corrupt archive with the real extractor"""
    archive = home / ".fonts/glyph-font.tar.xz"
    archive.parent.mkdir(parents=True)
    archive.write_bytes(b"not a tarball")
    workflow, _, _ = make_workflow([], extractor=TarExtractor())

    with pytest.raises(ArchiveError):
        workflow.extract_bundle(workflow.config.bundles[0])
    assert archive.exists()
