import stat
from pathlib import Path

import pytest

from tabpfn_provisioner import venv_tasks
from tabpfn_provisioner.config import Config
from tabpfn_provisioner.context import ProvisionContext
from tabpfn_provisioner.lib import toolchain, uv as uv_mod
from tabpfn_provisioner.lib.command import CmdResult
from tabpfn_provisioner.steps import step_10_ensure_toolchain, step_70_download_models

FAKE_UV = "/opt/fake/bin/uv"


def make_fake_python(venv_dir: Path) -> Path:
    py = uv_mod.venv_python_path(venv_dir)
    py.parent.mkdir(parents=True, exist_ok=True)
    py.write_text("#!/bin/sh\n", encoding="utf-8")
    py.chmod(py.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return py


def base_env(tmp_path: Path, **overrides: str) -> dict:
    env = {
        "HOME": str(tmp_path / "home"),
        "VENV_DIR": str(tmp_path / ".venv"),
    }
    env.update(overrides)
    return env


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides: str) -> Config:
        return Config.from_env(base_env(tmp_path, **overrides), project_dir=tmp_path)

    return _make


@pytest.fixture
def ready_ctx(make_config):
    """Context as it looks after the toolchain and venv steps."""

    def _make(**overrides: str) -> ProvisionContext:
        cfg = make_config(**overrides)
        return ProvisionContext(config=cfg, uv=FAKE_UV, venv_python=make_fake_python(cfg.venv_dir))

    return _make


class CommandRecorder:
    def __init__(self):
        self.calls = []
        self.kwargs = []
        # Return code per subcommand, e.g. {"pip": 2}
        self.fail = {}
        # Files the fake download writes, relative to the cache dir
        self.download_files = ["tabpfn-v2-classifier.ckpt", "nested/tabpfn-v2-regressor.ckpt"]

    def __call__(self, argv, **kwargs):
        argv = [str(a) for a in argv]
        self.calls.append(argv)
        self.kwargs.append(kwargs)

        sub = argv[1] if len(argv) > 1 else ""
        if sub in self.fail:
            from tabpfn_provisioner.errors import CommandError

            raise CommandError(argv, self.fail[sub], "boom from fake tool")

        if sub == "venv":
            make_fake_python(Path(argv[2]))
        elif "download" in argv:
            cache_dir = Path(argv[argv.index("--cache-dir") + 1])
            for rel in self.download_files:
                p = cache_dir / rel
                p.parent.mkdir(parents=True, exist_ok=True)
                p.write_bytes(b"weights")
            result = venv_tasks.DownloadResult(str(cache_dir), venv_tasks.count_checkpoints(cache_dir))
            return CmdResult(argv=argv, returncode=0, stdout=result.to_json() + "\n", stderr="")

        return CmdResult(argv=argv, returncode=0, stdout="uv 0.9.0\n", stderr="")

    def installs(self):
        return [c for c in self.calls if c[1:3] == ["pip", "install"]]

    def installed_specs(self):
        specs = []
        for c in self.installs():
            if "-r" in c:
                continue
            specs.extend(c[c.index("--python") + 2:])
        return specs


@pytest.fixture
def recorder(monkeypatch):
    rec = CommandRecorder()
    monkeypatch.setattr(uv_mod, "run_cmd", rec)
    monkeypatch.setattr(toolchain, "run_cmd", rec)
    monkeypatch.setattr(step_70_download_models, "run_cmd", rec)
    monkeypatch.setattr(step_10_ensure_toolchain, "find_executable", lambda name, **kw: FAKE_UV)
    return rec


@pytest.fixture
def logins(monkeypatch):
    tokens = []
    monkeypatch.setattr(step_70_download_models, "login_with_token", tokens.append)
    return tokens


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    # Keep the developer's real configuration out of the tests.
    for name in (
        "HF_TOKEN",
        "VENV_DIR",
        "PYTHON_BIN",
        "INSTALL_PROJECT_DEPS",
        "INSTALL_TABPFN_EXTENSIONS",
        "INSTALL_TABPFN_DEV_DEPS",
        "DOWNLOAD_TABPFN_MODELS",
        "TABPFN_VERSION",
        "TABPFN_EXTENSIONS_VERSION",
        "TABPFN_MODEL_CACHE_DIR",
        "TABPFN_DISABLE_TELEMETRY",
        "TABPFN_INSTALL_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
