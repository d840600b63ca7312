from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .config import Config, load_dotenv_file
from .context import ProvisionContext
from .errors import ProvisionError
from .lib.uv import venv_python_path
from .logging_utils import configure_logging
from .pipeline import PipelineResult, Step, run_pipeline
from .steps import (
    CreateVenvStep,
    DownloadModelsStep,
    EnsureToolchainStep,
    InstallCoreStep,
    InstallDevDepsStep,
    InstallExtensionsStep,
    SyncProjectStep,
)

logger = logging.getLogger(__name__)

ENV_HELP = """\
configuration (environment variables):
  VENV_DIR=.venv                     virtual environment location
  PYTHON_BIN=python3                 interpreter used by `uv venv`
  INSTALL_PROJECT_DEPS=0             sync pyproject.toml / requirements.txt
  INSTALL_TABPFN_EXTENSIONS=1        install tabpfn-extensions[all]
  INSTALL_TABPFN_DEV_DEPS=1          install TabPFN development tooling
  DOWNLOAD_TABPFN_MODELS=1           download all model weights
  TABPFN_VERSION=                    exact tabpfn version pin
  TABPFN_EXTENSIONS_VERSION=         exact tabpfn-extensions version pin
  TABPFN_MODEL_CACHE_DIR=~/.cache/tabpfn
  HF_TOKEN=                          Hugging Face token (also read from .env)
  TABPFN_DISABLE_TELEMETRY=1
  TABPFN_INSTALL_LOG=                optional log file
"""


def build_steps() -> List[Step]:
    return [
        EnsureToolchainStep(),
        CreateVenvStep(),
        SyncProjectStep(),
        InstallCoreStep(),
        InstallExtensionsStep(),
        InstallDevDepsStep(),
        DownloadModelsStep(),
    ]


def report_summary(ctx: ProvisionContext, result: PipelineResult) -> None:
    logger.info(
        "Steps run: %d, skipped: %d (%s).",
        len(result.ran_steps),
        len(result.skipped_steps),
        ", ".join(result.skipped_steps) or "none",
    )
    if ctx.checkpoint_count is not None:
        logger.info(
            "Model checkpoints available: %d in %s.",
            ctx.checkpoint_count,
            ctx.config.model_cache_dir,
        )
    logger.info("TabPFN environment setup complete.")
    activate = venv_python_path(ctx.config.venv_dir).parent / "activate"
    logger.info("Activate it with: source %s", activate)


def run(config: Config) -> PipelineResult:
    """Provision the environment described by ``config``."""

    ctx = ProvisionContext(config=config)
    result = run_pipeline(ctx=ctx, steps=build_steps())
    report_summary(ctx, result)
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="tabpfn-provision",
        description="Set up an offline-ready TabPFN environment with uv.",
        epilog=ENV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.parse_args(argv)

    load_dotenv_file()
    config = Config.from_env()
    configure_logging(log_path=config.log_path)

    try:
        run(config)
    except ProvisionError as e:
        for line in str(e).splitlines():
            logger.error("%s", line)
        return e.exit_code
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        return 130
    except Exception:
        logger.exception("Provisioning failed")
        raise
    return 0
