"""Errors raised by the ibs workflows.

The CLI catches `IbsError` and turns it into a red message plus exit code 1.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ibs.core.domain.models import CommandInvocation


class IbsError(Exception):
    """Base class for every user-facing failure."""


class CommandNotFoundError(IbsError):
    """The external program could not be started at all."""

    def __init__(self, invocation: "CommandInvocation", reason: str = "") -> None:
        self.invocation = invocation
        self.reason = reason
        message = f"Failed to execute command: {invocation.display()}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class CommandFailedError(IbsError):
    """The external program ran and returned a non-zero exit status."""

    def __init__(self, invocation: "CommandInvocation", returncode: int) -> None:
        self.invocation = invocation
        self.returncode = returncode
        super().__init__(f"Command failed: {invocation.display()} (exit code {returncode})")


class ProjectNotFoundError(IbsError):
    def __init__(self) -> None:
        super().__init__("No Xcode project found in current or parent directory")


class InvalidTargetError(IbsError):
    def __init__(self, value: str = "") -> None:
        self.value = value
        super().__init__("Invalid deployment target. Use 'device' or 'simulator'")


class MissingSimulatorIdError(IbsError):
    def __init__(self) -> None:
        super().__init__("Simulator ID is required for simulator deployment")


class InvalidProjectError(IbsError):
    pass


class FilesystemError(IbsError):
    """A directory or file the workflow needs could not be read or written."""

    def __init__(self, action: str, exc: OSError) -> None:
        self.action = action
        self.path = str(exc.filename) if exc.filename is not None else None
        detail = exc.strerror or str(exc)
        target = f" {self.path}" if self.path else ""
        super().__init__(f"Failed to {action}{target}: {detail}")


@contextmanager
def filesystem_errors(action: str) -> Iterator[None]:
    """Re-raise `OSError` from the wrapped block as `FilesystemError`."""

    try:
        yield
    except OSError as exc:
        raise FilesystemError(action, exc) from exc
