from __future__ import annotations

from typing import Optional, Sequence


class InstallerError(RuntimeError):
    """Base for every fatal installer failure.

    returncode is the exit status of the external command that failed, when
    there is one; the CLI uses it as its own exit status.
    """

    def __init__(self, message: str, *, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class CommandError(InstallerError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.stderr = stderr
        cmdline = " ".join(self.argv)
        msg = f"Command failed ({returncode}): {cmdline}"
        if stderr.strip():
            msg += f"\n{stderr.strip()}"
        super().__init__(msg, returncode=returncode)


class RepositoryError(InstallerError):
    pass


class TransferError(InstallerError):
    pass


class ArchiveError(InstallerError):
    pass


class IntegrationError(InstallerError):
    pass


class MissingPathWarning(UserWarning):
    """A size-report target does not exist. Reported inline, never raised."""

    def __init__(self, path: str) -> None:
        super().__init__(f"cannot access '{path}': No such file or directory")
        self.path = path


def wrap_error(cls: type, message: str, cause: BaseException) -> InstallerError:
    """Build a step error from a lower-level failure, keeping its exit status."""

    returncode = getattr(cause, "returncode", None)
    return cls(f"{message}: {cause}", returncode=returncode)
