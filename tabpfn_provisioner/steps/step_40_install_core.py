from __future__ import annotations

import logging
from typing import List

from ..config import Config
from ..context import ProvisionContext
from ..lib.manifests import Requirement
from ..lib.uv import uv_pip_install

logger = logging.getLogger(__name__)

TABPFN_PACKAGE = "tabpfn"
HUB_REQUIREMENT = Requirement("huggingface_hub[cli]", ">=0.24.0")


def core_requirements(config: Config) -> List[Requirement]:
    return [Requirement.pinned(TABPFN_PACKAGE, config.tabpfn_version), HUB_REQUIREMENT]


class InstallCoreStep:
    step_id = "40_install_core"
    label = "TabPFN core install"
    flag = None

    def enabled(self, config: Config) -> bool:
        return True

    def run(self, ctx: ProvisionContext) -> None:
        logger.info("Installing TabPFN core packages ...")
        specs = [r.spec() for r in core_requirements(ctx.config)]
        uv_pip_install(ctx.require_uv(), specs, python=ctx.require_python())
