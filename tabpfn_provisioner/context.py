from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import Config
from .errors import EnvironmentCreationError, ToolchainError


@dataclass
class ProvisionContext:
    """Run facts shared between steps.

    ``config`` never changes. ``uv`` and ``venv_python`` are set by the
    toolchain and venv steps; later steps only read them.
    """

    config: Config
    uv: Optional[str] = None
    venv_python: Optional[Path] = None
    checkpoint_count: Optional[int] = None

    def require_uv(self) -> str:
        if not self.uv:
            raise ToolchainError("uv has not been resolved; run 10_ensure_toolchain first")
        return self.uv

    def require_python(self) -> Path:
        py = self.venv_python
        if py is None or not py.is_file() or not os.access(py, os.X_OK):
            raise EnvironmentCreationError(
                f"Virtual environment interpreter is not available: {py}; run 20_create_venv first"
            )
        return py
