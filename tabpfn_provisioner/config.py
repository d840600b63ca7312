from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_VENV_DIR = ".venv"
DEFAULT_PYTHON_BIN = "python3"
DEFAULT_MODEL_CACHE_SUBDIR = Path(".cache") / "tabpfn"


def is_enabled(value: Optional[str]) -> bool:
    """A flag is on only when it is exactly ``1`` (surrounding blanks ignored)."""
    return (value or "").strip() == "1"


def _optional(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def load_dotenv_file(project_dir: Optional[Path] = None) -> bool:
    """Load ``<project_dir>/.env`` into the process environment.

    Values already present in the real environment win, so an exported
    ``HF_TOKEN`` is never replaced by a stale one from the file.
    """
    env_path = (project_dir or Path.cwd()) / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(dotenv_path=env_path, override=False)


@dataclass(frozen=True)
class Config:
    """Provisioning options, read once at startup and never mutated."""

    venv_dir: Path = Path(DEFAULT_VENV_DIR)
    python_bin: str = DEFAULT_PYTHON_BIN
    install_project_deps: bool = False
    install_extensions: bool = True
    install_dev_deps: bool = True
    download_models: bool = True
    tabpfn_version: Optional[str] = None
    extensions_version: Optional[str] = None
    model_cache_dir: Path = field(default_factory=lambda: Path.home() / DEFAULT_MODEL_CACHE_SUBDIR)
    hf_token: Optional[str] = field(default=None, repr=False)
    disable_telemetry: bool = True
    project_dir: Path = field(default_factory=Path.cwd)
    log_path: Optional[str] = None
    # Raw flag strings, kept for the "Skipping ... (FLAG=value)" messages.
    raw_flags: Mapping[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        project_dir: Optional[Path] = None,
    ) -> "Config":
        env = os.environ if environ is None else environ
        home = Path(env.get("HOME") or Path.home())

        # Empty counts as unset, so the default applies.
        raw_flags = {
            "INSTALL_PROJECT_DEPS": env.get("INSTALL_PROJECT_DEPS") or "0",
            "INSTALL_TABPFN_EXTENSIONS": env.get("INSTALL_TABPFN_EXTENSIONS") or "1",
            "INSTALL_TABPFN_DEV_DEPS": env.get("INSTALL_TABPFN_DEV_DEPS") or "1",
            "DOWNLOAD_TABPFN_MODELS": env.get("DOWNLOAD_TABPFN_MODELS") or "1",
        }

        cache_dir = _optional(env.get("TABPFN_MODEL_CACHE_DIR"))
        return cls(
            venv_dir=Path(env.get("VENV_DIR") or DEFAULT_VENV_DIR),
            python_bin=env.get("PYTHON_BIN") or DEFAULT_PYTHON_BIN,
            install_project_deps=is_enabled(raw_flags["INSTALL_PROJECT_DEPS"]),
            install_extensions=is_enabled(raw_flags["INSTALL_TABPFN_EXTENSIONS"]),
            install_dev_deps=is_enabled(raw_flags["INSTALL_TABPFN_DEV_DEPS"]),
            download_models=is_enabled(raw_flags["DOWNLOAD_TABPFN_MODELS"]),
            tabpfn_version=_optional(env.get("TABPFN_VERSION")),
            extensions_version=_optional(env.get("TABPFN_EXTENSIONS_VERSION")),
            model_cache_dir=(
                Path(cache_dir).expanduser() if cache_dir else home / DEFAULT_MODEL_CACHE_SUBDIR
            ),
            hf_token=_optional(env.get("HF_TOKEN")),
            disable_telemetry=is_enabled(env.get("TABPFN_DISABLE_TELEMETRY") or "1"),
            project_dir=project_dir or Path.cwd(),
            log_path=_optional(env.get("TABPFN_INSTALL_LOG")),
            raw_flags=raw_flags,
        )

    def flag_value(self, name: str) -> str:
        return self.raw_flags.get(name, "")
