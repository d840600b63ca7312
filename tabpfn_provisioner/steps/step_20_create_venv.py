from __future__ import annotations

import logging
import os

from ..config import Config
from ..context import ProvisionContext
from ..errors import EnvironmentCreationError
from ..lib.uv import uv_venv, venv_python_path

logger = logging.getLogger(__name__)


class CreateVenvStep:
    step_id = "20_create_venv"
    label = "virtual environment"
    flag = None

    def enabled(self, config: Config) -> bool:
        return True

    def run(self, ctx: ProvisionContext) -> None:
        cfg = ctx.config
        uv = ctx.require_uv()

        logger.info("Creating/updating virtual environment at %s ...", cfg.venv_dir)
        uv_venv(uv, cfg.venv_dir, python=cfg.python_bin)

        venv_python = venv_python_path(cfg.venv_dir)
        if not venv_python.is_file() or not os.access(venv_python, os.X_OK):
            raise EnvironmentCreationError(
                f"Expected python executable at {venv_python}, but it was not found."
            )
        ctx.venv_python = venv_python
