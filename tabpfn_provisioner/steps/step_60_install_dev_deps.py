from __future__ import annotations

import logging

from ..config import Config
from ..context import ProvisionContext
from ..lib.manifests import load_dev_packages
from ..lib.uv import uv_pip_install

logger = logging.getLogger(__name__)


class InstallDevDepsStep:
    step_id = "60_install_dev_deps"
    label = "TabPFN dev dependencies"
    flag = "INSTALL_TABPFN_DEV_DEPS"

    def enabled(self, config: Config) -> bool:
        return config.install_dev_deps

    def run(self, ctx: ProvisionContext) -> None:
        logger.info("Installing TabPFN development dependencies ...")
        packages = [r.spec() for r in load_dev_packages()]
        uv_pip_install(ctx.require_uv(), packages, python=ctx.require_python())
