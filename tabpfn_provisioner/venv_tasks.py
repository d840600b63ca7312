"""Tasks executed by the provisioned environment's own interpreter.

TabPFN (and torch behind it) is installed into the target virtual
environment, not next to the provisioner, so work that needs it runs as::

    <venv>/bin/python -I /path/to/venv_tasks.py download --cache-dir DIR

This file must therefore stay importable on its own: standard library
imports at module level, TabPFN imported inside the task. A task prints its
result as one JSON line on stdout; logs and progress go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger("tabpfn_provisioner.venv_tasks")

CHECKPOINT_SUFFIXES = (".ckpt", ".pt")

LEVEL_TAGS = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


class TagFormatter(logging.Formatter):
    """Render records as ``[info] message`` / ``[warn] message`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        record.tag = LEVEL_TAGS.get(record.levelno, record.levelname.lower())
        return super().format(record)


@dataclass(frozen=True)
class DownloadResult:
    cache_dir: str
    checkpoints: int

    def to_json(self) -> str:
        return json.dumps(asdict(self), sort_keys=True)

    @classmethod
    def from_json(cls, line: str) -> "DownloadResult":
        data = json.loads(line)
        return cls(cache_dir=str(data["cache_dir"]), checkpoints=int(data["checkpoints"]))


def count_checkpoints(cache_dir: Path, suffixes: Iterable[str] = CHECKPOINT_SUFFIXES) -> int:
    """Count checkpoint files anywhere below ``cache_dir``."""
    cache_dir = Path(cache_dir)
    if not cache_dir.is_dir():
        return 0
    wanted = tuple(suffixes)
    return sum(1 for p in cache_dir.rglob("*") if p.is_file() and p.name.endswith(wanted))


def download_models(cache_dir: Path) -> DownloadResult:
    """Fetch every known TabPFN checkpoint into ``cache_dir``.

    Errors from TabPFN propagate unchanged.
    """
    from tabpfn.model.loading import download_all_models

    cache_dir = Path(cache_dir).expanduser()
    cache_dir.mkdir(parents=True, exist_ok=True)

    download_all_models(cache_dir)
    logger.info("Model download completed in: %s", cache_dir)
    return DownloadResult(cache_dir=str(cache_dir), checkpoints=count_checkpoints(cache_dir))


def configure_task_logging() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(TagFormatter(fmt="[%(tag)s] %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    return handler


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="venv_tasks")
    sub = p.add_subparsers(dest="task", required=True)
    dl = sub.add_parser("download", help="Download all TabPFN model weights")
    dl.add_argument("--cache-dir", required=True, type=Path)

    args = p.parse_args(argv)

    configure_task_logging()
    if args.task == "download":
        result = download_models(args.cache_dir)
        print(result.to_json(), flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
