from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

# Make the `ibs` package importable without an editable install
SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ibs.core.domain.models import CommandInvocation
from ibs.core.errors import CommandFailedError


class RecordingRunner:
    """CommandRunner fake: records every invocation, optionally fails some."""

    def __init__(self, fail_when: Callable[[CommandInvocation], bool] | None = None) -> None:
        self.invocations: list[CommandInvocation] = []
        self._fail_when = fail_when

    def run(self, invocation: CommandInvocation) -> None:
        self.invocations.append(invocation)
        if self._fail_when is not None and self._fail_when(invocation):
            raise CommandFailedError(invocation, 65)

    @property
    def argvs(self) -> list[list[str]]:
        return [inv.argv for inv in self.invocations]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep real IBS_* variables and .env files out of the tests."""

    for key in list(os.environ):
        if key.upper().startswith("IBS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture()
def recorder() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture()
def xcode_project(tmp_path) -> Path:
    """A directory holding `Demo.xcodeproj`, as left behind by `ibs setup Demo`."""

    project_dir = tmp_path / "Demo"
    (project_dir / "Demo.xcodeproj").mkdir(parents=True)
    return project_dir
