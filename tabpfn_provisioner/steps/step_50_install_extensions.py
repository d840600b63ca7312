from __future__ import annotations

import logging

from ..config import Config
from ..context import ProvisionContext
from ..lib.manifests import Requirement
from ..lib.uv import uv_pip_install

logger = logging.getLogger(__name__)

EXTENSIONS_PACKAGE = "tabpfn-extensions[all]"


def extensions_requirement(config: Config) -> Requirement:
    return Requirement.pinned(EXTENSIONS_PACKAGE, config.extensions_version)


class InstallExtensionsStep:
    step_id = "50_install_extensions"
    label = "TabPFN extensions install"
    flag = "INSTALL_TABPFN_EXTENSIONS"

    def enabled(self, config: Config) -> bool:
        return config.install_extensions

    def run(self, ctx: ProvisionContext) -> None:
        logger.info("Installing TabPFN extensions (all extras) ...")
        uv_pip_install(
            ctx.require_uv(),
            [extensions_requirement(ctx.config).spec()],
            python=ctx.require_python(),
        )
