from __future__ import annotations

import shlex
from typing import Sequence


class ProvisionError(RuntimeError):
    """Fatal provisioning failure; carries the process exit code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class ToolchainError(ProvisionError):
    pass


class EnvironmentCreationError(ProvisionError):
    pass


class ManifestError(ProvisionError):
    pass


class CommandError(ProvisionError):
    """An external command exited non-zero."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed ({returncode}): {shlex.join(self.argv)}"
        if stderr:
            msg = f"{msg}\n{stderr.rstrip()}"
        if returncode > 0:
            exit_code = returncode
        elif returncode < 0:
            # Killed by signal N: report 128+N like a shell.
            exit_code = 128 - returncode
        else:
            exit_code = 1
        super().__init__(msg, exit_code=exit_code)
