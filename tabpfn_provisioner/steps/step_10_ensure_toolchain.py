from __future__ import annotations

import logging

from ..config import Config
from ..context import ProvisionContext
from ..lib.toolchain import find_executable, install_uv
from ..lib.uv import uv_version

logger = logging.getLogger(__name__)


class EnsureToolchainStep:
    step_id = "10_ensure_toolchain"
    label = "uv toolchain check"
    flag = None

    def enabled(self, config: Config) -> bool:
        return True

    def run(self, ctx: ProvisionContext) -> None:
        uv = find_executable("uv")
        if uv:
            logger.info("uv found: %s", uv_version(uv))
        else:
            uv = install_uv()
            logger.info("uv installed: %s", uv_version(uv))
        ctx.uv = uv
