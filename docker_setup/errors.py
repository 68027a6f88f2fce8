from __future__ import annotations

from typing import Sequence


class ProvisionError(RuntimeError):
    """Base class for failures that end a run with a specific exit status."""

    exit_code: int = 1


class PrivilegeError(ProvisionError):
    pass


class PlatformMismatch(ProvisionError):
    pass


class VerificationFailure(ProvisionError):
    pass


class CommandError(ProvisionError):
    """An external command exited non-zero."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "", message: str | None = None):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        if message is None:
            message = f"Command failed ({returncode}): {' '.join(self.argv)}"
            if stderr.strip():
                message += f"\n{stderr.strip()}"
        super().__init__(message)

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return self.returncode if self.returncode > 0 else 1


class DependencyInstallFailure(CommandError):
    @classmethod
    def from_command(cls, err: CommandError, what: str) -> "DependencyInstallFailure":
        return cls(err.argv, err.returncode, err.stderr, message=f"{what}: {err}")
