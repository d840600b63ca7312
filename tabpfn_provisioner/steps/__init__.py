from .step_10_ensure_toolchain import EnsureToolchainStep
from .step_20_create_venv import CreateVenvStep
from .step_30_sync_project import SyncProjectStep
from .step_40_install_core import InstallCoreStep
from .step_50_install_extensions import InstallExtensionsStep
from .step_60_install_dev_deps import InstallDevDepsStep
from .step_70_download_models import DownloadModelsStep

__all__ = [
    "EnsureToolchainStep",
    "CreateVenvStep",
    "SyncProjectStep",
    "InstallCoreStep",
    "InstallExtensionsStep",
    "InstallDevDepsStep",
    "DownloadModelsStep",
]
