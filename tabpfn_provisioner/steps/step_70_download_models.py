from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

from .. import venv_tasks
from ..config import Config
from ..context import ProvisionContext
from ..errors import ProvisionError
from ..lib.command import run_cmd
from ..lib.hf import login_with_token
from ..lib.uv import venv_python_path

logger = logging.getLogger(__name__)


def authenticate_if_token_present(config: Config) -> bool:
    """Log into Hugging Face when HF_TOKEN is set; warn otherwise."""

    if config.hf_token:
        logger.info("Logging into Hugging Face using HF_TOKEN ...")
        login_with_token(config.hf_token)
        return True

    logger.warning(
        "HF_TOKEN not set. Model download requires accepted license + an authenticated "
        "Hugging Face session."
    )
    activate = venv_python_path(config.venv_dir).parent / "activate"
    logger.warning("If download fails, run: source %s && hf auth login", activate)
    return False


def download_env(config: Config) -> Dict[str, str]:
    env = {"TABPFN_MODEL_CACHE_DIR": str(config.model_cache_dir)}
    if config.disable_telemetry:
        env["TABPFN_DISABLE_TELEMETRY"] = "1"
    return env


def read_download_result(stdout: str) -> venv_tasks.DownloadResult:
    """Parse the JSON line the download task prints last."""
    lines = [line for line in stdout.splitlines() if line.strip()]
    try:
        return venv_tasks.DownloadResult.from_json(lines[-1])
    except (IndexError, ValueError, KeyError, TypeError) as e:
        raise ProvisionError("Model download task did not report a result.") from e


class DownloadModelsStep:
    step_id = "70_download_models"
    label = "model download"
    flag = "DOWNLOAD_TABPFN_MODELS"

    def enabled(self, config: Config) -> bool:
        return config.download_models

    def run(self, ctx: ProvisionContext) -> None:
        cfg = ctx.config
        python = ctx.require_python()

        authenticate_if_token_present(cfg)

        cache_dir = cfg.model_cache_dir
        cache_dir.mkdir(parents=True, exist_ok=True)

        logger.info("Downloading all TabPFN model weights into %s ...", cache_dir)
        # -I keeps this package directory off the child's sys.path.
        r = run_cmd(
            [python, "-I", Path(venv_tasks.__file__).resolve(), "download", "--cache-dir", cache_dir],
            env=download_env(cfg),
            capture_stderr=False,
        )

        ctx.checkpoint_count = read_download_result(r.stdout).checkpoints
        logger.info(
            "Detected %d model checkpoint files in %s.", ctx.checkpoint_count, cache_dir
        )
