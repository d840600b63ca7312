from __future__ import annotations

import logging

from ..config import Config
from ..context import ProvisionContext
from ..lib.uv import uv_pip_install_requirements, uv_sync

logger = logging.getLogger(__name__)


class SyncProjectStep:
    step_id = "30_sync_project"
    label = "local project dependency install"
    flag = "INSTALL_PROJECT_DEPS"

    def enabled(self, config: Config) -> bool:
        return config.install_project_deps

    def run(self, ctx: ProvisionContext) -> None:
        project_dir = ctx.config.project_dir
        pyproject = project_dir / "pyproject.toml"
        requirements = project_dir / "requirements.txt"

        # Local dependencies are best-effort: a bare directory is not an error.
        if pyproject.is_file():
            logger.info("Syncing local project dependencies from pyproject.toml/uv.lock ...")
            uv_sync(ctx.require_uv(), python=ctx.require_python(), project_dir=project_dir)
        elif requirements.is_file():
            logger.info("Installing local project dependencies from requirements.txt ...")
            uv_pip_install_requirements(
                ctx.require_uv(), requirements, python=ctx.require_python()
            )
        else:
            logger.warning("No pyproject.toml or requirements.txt found. Continuing.")
