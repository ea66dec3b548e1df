"""Runners for external toolchain commands.

Why an adapter:
- `subprocess` is the only place the tool touches the outside world.
- The dry-run runner and test fakes replace it through the `CommandRunner`
  contract.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Callable

from ibs.core.domain.models import CommandInvocation
from ibs.core.errors import CommandFailedError, CommandNotFoundError

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Run commands with inherited stdio, like a shell script would.

    Output of xcodebuild and friends streams straight to the terminal; only
    the exit status is inspected.
    """

    def run(self, invocation: CommandInvocation) -> None:
        logger.debug("Running %s (cwd=%s)", invocation.display(), invocation.cwd or ".")
        try:
            completed = subprocess.run(invocation.argv, cwd=invocation.cwd, check=False)
        except OSError as exc:
            raise CommandNotFoundError(invocation, exc.strerror or str(exc)) from exc

        if completed.returncode != 0:
            logger.debug("%s exited with %s", invocation.program, completed.returncode)
            raise CommandFailedError(invocation, completed.returncode)


class DryRunRunner:
    """Report commands instead of running them."""

    def __init__(self, echo: Callable[[CommandInvocation], None] | None = None) -> None:
        self._echo = echo
        self.invocations: list[CommandInvocation] = []

    def run(self, invocation: CommandInvocation) -> None:
        self.invocations.append(invocation)
        logger.info("[dry-run] %s", invocation.display())
        if self._echo is not None:
            self._echo(invocation)
