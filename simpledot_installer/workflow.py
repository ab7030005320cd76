from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .config import InstallerConfig
from .lib.archive import ArchiveBundle, ArchiveExtractor, TarExtractor
from .lib.integrations import SystemIntegrator, SystemTools
from .lib.sizes import DiskUsage, DuDiskUsage, SizeEntry, report_sizes
from .lib.sync import FileSynchronizer, FileTransferSpec, RsyncSynchronizer
from .lib.vcs import GitClient, RepositorySource, VersionControlClient
from .pipeline import Step, WorkflowContext, WorkflowResult, run_pipeline
from .prompt import Prompter
from .steps import (
    ExtractBundlesStep,
    IntegrationsStep,
    RepositoryStep,
    SizeReportStep,
    TransferFilesStep,
)
from .steps.step_10_repository import RepositoryOutcome, ensure_repository
from .steps.step_30_transfer_files import TransferOutcome, transfer_files
from .steps.step_40_extract_bundles import ExtractOutcome, extract_bundle
from .steps.step_50_integrations import Integration, IntegrationOutcome, apply_optional_integration

logger = logging.getLogger(__name__)

GREETING = (
    "Hello there! These dotfiles are made by @Lea.",
    "You are now in the installation step.",
    "",
)


def build_steps() -> List[Step]:
    return [
        RepositoryStep(),
        SizeReportStep(),
        TransferFilesStep(),
        ExtractBundlesStep(),
        IntegrationsStep(),
    ]


class InstallerWorkflow:
    """The dotfiles installation run.

    Every external tool is injectable; by default the real git/rsync/tar/du
    and system tools are used, all honouring config.dry_run.
    """

    def __init__(
        self,
        config: InstallerConfig,
        *,
        prompter: Optional[Prompter] = None,
        vcs: Optional[VersionControlClient] = None,
        synchronizer: Optional[FileSynchronizer] = None,
        extractor: Optional[ArchiveExtractor] = None,
        disk_usage: Optional[DiskUsage] = None,
        integrator: Optional[SystemIntegrator] = None,
    ) -> None:
        dry_run = config.dry_run
        self.ctx = WorkflowContext(
            config=config,
            prompter=prompter or Prompter(),
            vcs=vcs or GitClient(depth=config.clone_depth, dry_run=dry_run),
            synchronizer=synchronizer or RsyncSynchronizer(dry_run=dry_run),
            extractor=extractor or TarExtractor(dry_run=dry_run),
            disk_usage=disk_usage or DuDiskUsage(dry_run=dry_run),
            integrator=integrator or SystemTools(sudo=config.sudo, dry_run=dry_run),
        )

    @property
    def config(self) -> InstallerConfig:
        return self.ctx.config

    def run(self) -> WorkflowResult:
        for line in GREETING:
            self.ctx.prompter.say(line)

        result = run_pipeline(ctx=self.ctx, steps=build_steps())
        if not result.aborted:
            self.ctx.prompter.say("Installation completed!")
        logger.info("Workflow finished at %s: %s", result.final_stage.value, result.outcomes)
        return result

    # Single operations, for callers that drive the steps themselves.

    def ensure_repository(self, source: Optional[RepositorySource] = None) -> RepositoryOutcome:
        return ensure_repository(self.ctx, source or self.config.repository)

    def report_sizes(self, paths: Optional[Iterable[Path]] = None) -> Iterator[SizeEntry]:
        return report_sizes(paths if paths is not None else self.config.size_report_paths, self.ctx.disk_usage)

    def transfer_files(self, spec: Optional[FileTransferSpec] = None) -> TransferOutcome:
        return transfer_files(self.ctx, spec or self.config.transfer_spec)

    def extract_bundle(self, bundle: ArchiveBundle) -> ExtractOutcome:
        return extract_bundle(self.ctx, bundle)

    def apply_optional_integration(self, integration: Integration) -> IntegrationOutcome:
        return apply_optional_integration(self.ctx, integration)
