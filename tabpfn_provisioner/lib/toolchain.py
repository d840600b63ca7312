from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import CommandError, ToolchainError
from .command import run_cmd

logger = logging.getLogger(__name__)

UV_INSTALL_URL = "https://astral.sh/uv/install.sh"

# Fetchers tried in order to download the uv install script.
FETCHERS: Sequence[Sequence[str]] = (
    ("curl", "-LsSf"),
    ("wget", "-qO-"),
)


def user_bin_dirs(home: Optional[Path] = None) -> List[Path]:
    """Where the uv installer and pipx drop executables."""
    h = home or Path.home()
    return [h / ".local" / "bin", h / ".cargo" / "bin"]


def search_path(extra: Sequence[Path] = ()) -> str:
    """PATH with ``extra`` directories in front, without touching os.environ."""
    parts = [str(p) for p in extra]
    parts += [p for p in (os.environ.get("PATH") or "").split(os.pathsep) if p]
    return os.pathsep.join(parts)


def find_executable(name: str, *, extra_dirs: Sequence[Path] = ()) -> Optional[str]:
    return shutil.which(name, path=search_path(extra_dirs))


def fetch_install_script(url: str = UV_INSTALL_URL) -> str:
    for tool, *args in FETCHERS:
        exe = find_executable(tool)
        if exe:
            # Keep the install script body out of the debug log.
            return run_cmd([exe, *args, url], log_output=False).stdout
    raise ToolchainError("Neither curl nor wget is available to install uv.")


def install_uv_with_pipx(pipx: str) -> None:
    try:
        run_cmd([pipx, "install", "uv"], capture=False)
    except CommandError:
        run_cmd([pipx, "upgrade", "uv"], capture=False)


def install_uv(*, home: Optional[Path] = None) -> str:
    """Install uv and return the path of the new executable.

    Install order: the official install script (curl, then wget), then
    ``pipx`` as a fallback when the script finished but uv still cannot be
    found. The known user bin directories are searched explicitly instead of
    being exported into PATH.
    """

    logger.info("uv not found. Installing uv...")
    bin_dirs = user_bin_dirs(home)

    script = fetch_install_script()
    run_cmd(["sh"], input_text=script, capture=False)

    uv = find_executable("uv", extra_dirs=bin_dirs)
    if not uv:
        pipx = find_executable("pipx", extra_dirs=bin_dirs)
        if pipx:
            logger.warning("uv installer finished but uv is still not on PATH; trying pipx...")
            install_uv_with_pipx(pipx)
            uv = find_executable("uv", extra_dirs=bin_dirs)

    if not uv:
        raise ToolchainError(
            "uv installation failed or uv is not on PATH.\n"
            "Try a new shell or ensure ~/.local/bin (or ~/.cargo/bin) is on PATH."
        )
    return uv
