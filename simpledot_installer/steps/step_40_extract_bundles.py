from __future__ import annotations

import logging
from enum import Enum

from ..errors import ArchiveError, InstallerError, wrap_error
from ..lib.archive import ArchiveBundle
from ..pipeline import Stage, StepResult, WorkflowContext

logger = logging.getLogger(__name__)


class ExtractOutcome(str, Enum):
    EXTRACTED = "extracted"
    SKIPPED = "skipped"


def extract_bundle(ctx: WorkflowContext, bundle: ArchiveBundle) -> ExtractOutcome:
    """Unpack one archive in place and delete it.

    An absent archive means an earlier run already handled it. The archive is
    only deleted once the extractor returned without error.
    """

    if not bundle.archive_path.exists():
        logger.info("Skipping %s: %s not present", bundle.name, bundle.archive_path)
        return ExtractOutcome.SKIPPED

    ctx.prompter.say(f"Extracting {bundle.name}...")
    try:
        ctx.extractor.extract(bundle)
    except (InstallerError, OSError) as e:
        raise wrap_error(ArchiveError, f"Extracting {bundle.archive_path} failed", e) from e
    ctx.prompter.say(f"{bundle.name} extracted.")

    if ctx.dry_run:
        logger.info("Would delete %s", bundle.archive_path)
    else:
        try:
            bundle.archive_path.unlink()
        except OSError as e:
            raise wrap_error(ArchiveError, f"Deleting {bundle.archive_path} failed", e) from e
        ctx.prompter.say(f"{bundle.archive_path.name} deleted.")
    ctx.prompter.say()
    return ExtractOutcome.EXTRACTED


class ExtractBundlesStep:
    stage = Stage.ARCHIVE_EXTRACTION

    def run(self, ctx: WorkflowContext) -> StepResult:
        counts = {o: 0 for o in ExtractOutcome}
        for bundle in ctx.config.bundles:
            outcome = extract_bundle(ctx, bundle)
            ctx.record(f"bundle:{bundle.name}", outcome.value)
            counts[outcome] += 1

        return StepResult(
            outcome=" ".join(f"{o.value}={n}" for o, n in counts.items()),
        )
