from .step_10_repository import RepositoryStep
from .step_20_size_report import SizeReportStep
from .step_30_transfer_files import TransferFilesStep
from .step_40_extract_bundles import ExtractBundlesStep
from .step_50_integrations import IntegrationsStep

__all__ = [
    "RepositoryStep",
    "SizeReportStep",
    "TransferFilesStep",
    "ExtractBundlesStep",
    "IntegrationsStep",
]
