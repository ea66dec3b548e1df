"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Validates CLI input at the edge (project names, targets) before any
  directory is created or any tool is started.
- Keeps the services working on typed values instead of loose strings.

Note:
- These models describe *what* is built and deployed, not *how*; the how is
  the external toolchain's job.
"""

from __future__ import annotations

import shlex
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from ibs.core.errors import InvalidProjectError, InvalidTargetError


class DeployTarget(str, Enum):
    """Where `deploy` installs the app."""

    DEVICE = "device"
    SIMULATOR = "simulator"

    @classmethod
    def parse(cls, value: str) -> "DeployTarget":
        try:
            return cls(value)
        except ValueError:
            raise InvalidTargetError(value) from None


class ProjectSpec(BaseModel):
    """Everything the scaffold templates need to know about a new project."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Project, target and scheme name. Also the directory name.",
    )
    team_id: str = Field(
        ...,
        min_length=1,
        description="Apple Developer Team ID written into project.yml.",
    )
    bundle_id_prefix: str = Field(default="com.example", min_length=1)
    deployment_target: str = Field(default="15.0", min_length=1)
    xcode_version: str = Field(default="15.0", min_length=1)

    @field_validator("name")
    @classmethod
    def _name_is_a_single_path_component(cls, value: str) -> str:
        if value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"project name must be a plain directory name, got {value!r}")
        return value

    @classmethod
    def create(cls, **values: object) -> "ProjectSpec":
        """Validate and build, raising `InvalidProjectError` instead of pydantic's error."""

        try:
            return cls.model_validate(values)
        except ValueError as exc:
            raise InvalidProjectError(str(exc)) from exc

    @property
    def bundle_identifier(self) -> str:
        return f"{self.bundle_id_prefix}.{self.name}"


class BuildRequest(BaseModel):
    """Parameters shared by `build` and `deploy`."""

    configuration: str = Field(default="Debug", min_length=1)
    team_id: str | None = Field(
        default=None,
        description="Passed through as DEVELOPMENT_TEAM when present.",
    )
    scheme: str | None = Field(
        default=None,
        description="Scheme override; defaults to the located project's name.",
    )


class DeployRequest(BuildRequest):
    target: DeployTarget
    simulator_id: str | None = None


class XcodeProject(BaseModel):
    """A located `.xcodeproj` bundle."""

    model_config = ConfigDict(frozen=True)

    scheme: str = Field(..., min_length=1, description="Stem of the .xcodeproj directory.")
    directory: Path = Field(..., description="Directory holding the .xcodeproj.")


class CommandInvocation(BaseModel):
    """One external program call: program, arguments and working directory."""

    model_config = ConfigDict(frozen=True)

    program: str = Field(..., min_length=1)
    args: tuple[str, ...] = Field(default_factory=tuple)
    cwd: Path | None = None

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def in_dir(self, cwd: Path) -> "CommandInvocation":
        return self.model_copy(update={"cwd": cwd})

    def display(self) -> str:
        return shlex.join(self.argv)
