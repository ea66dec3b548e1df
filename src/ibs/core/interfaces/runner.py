"""Contract for running external toolchain commands.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The real subprocess runner, the dry-run runner and test fakes are
  interchangeable without the core importing any of them.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ibs.core.domain.models import CommandInvocation


@runtime_checkable
class CommandRunner(Protocol):
    """Minimal contract for executing one external command.

    Design rules:
    - `run` blocks until the program exits.
    - A non-zero exit raises `CommandFailedError`; a program that cannot be
      started raises `CommandNotFoundError`. Nothing is returned.
    """

    def run(self, invocation: CommandInvocation) -> None:
        """Run `invocation` and raise on failure."""

        ...
