from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

# The venv task process formats its logs the same way.
from .venv_tasks import TagFormatter


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Configure logging for a provisioning run.

    Console output uses short severity tags so it reads like the install
    transcript users expect. A log file is only written when ``log_path`` is
    given (``TABPFN_INSTALL_LOG``); by default the provisioner leaves nothing
    on disk besides the environment and the model cache.

    Returns the log file path in use, if any.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_tabpfn_configured", False):
        return getattr(logger, "_tabpfn_log_path", log_path)

    handlers: list[logging.Handler] = []

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(TagFormatter(fmt="[%(tag)s] %(message)s"))
        handlers.append(console)

    if log_path:
        Path(log_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(Path(log_path).expanduser(), encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S%z",
            )
        )
        handlers.append(file_handler)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_tabpfn_configured", True)
    setattr(logger, "_tabpfn_log_path", log_path)

    if log_path:
        logging.getLogger(__name__).debug("Logging to %s", log_path)
    return log_path
