from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


def venv_python_path(venv_dir: Path) -> Path:
    if os.name == "nt":
        return venv_dir / "Scripts" / "python.exe"
    return venv_dir / "bin" / "python"


def uv_version(uv: str) -> str:
    r = run_cmd([uv, "--version"], check=False)
    return r.stdout.strip() or "unknown version"


def uv_venv(uv: str, venv_dir: Path, *, python: str) -> None:
    # --allow-existing updates an existing environment in place instead of refusing.
    run_cmd(
        [uv, "venv", str(venv_dir), "--python", python, "--allow-existing"],
        capture=False,
    )


def uv_sync(uv: str, *, python: Path, project_dir: Path) -> None:
    run_cmd(
        [uv, "sync", "--python", str(python)],
        cwd=str(project_dir),
        capture=False,
    )


def uv_pip_install(
    uv: str,
    packages: Sequence[str],
    *,
    python: Path,
) -> CmdResult | None:
    if not packages:
        return None
    return run_cmd(
        [uv, "pip", "install", "--python", str(python), *packages],
        capture=False,
    )


def uv_pip_install_requirements(
    uv: str,
    requirements_file: Path,
    *,
    python: Path,
) -> None:
    run_cmd(
        [uv, "pip", "install", "--python", str(python), "-r", str(requirements_file)],
        cwd=str(requirements_file.parent),
        capture=False,
    )
