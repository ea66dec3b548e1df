"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets services and adapters read toolchain paths and project defaults the
  same way.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory: APPDATA, Application Support or XDG."""

    home = Path.home()
    if sys.platform.startswith("win"):
        root = Path(os.environ.get("APPDATA") or home)
    elif sys.platform == "darwin":
        root = home / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config")
    return root / "ibs"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing = {
        key: value
        for key, value in dotenv_values(env_path, encoding="utf-8").items()
        if value is not None
    }

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# ibs user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Every value can come from an `IBS_*` environment variable, the project
    `.env` or the user `.env`, in that order of precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="IBS_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    team_id: str | None = Field(
        default=None,
        description="Default Apple Developer Team ID for build/deploy when --team-id is omitted.",
    )
    bundle_id_prefix: str = Field(
        default="com.example",
        min_length=1,
        description="Reverse-DNS prefix for generated bundle identifiers.",
    )
    deployment_target: str = Field(
        default="15.0",
        min_length=1,
        description="Minimum iOS version written to project.yml.",
    )
    xcode_version: str = Field(
        default="15.0",
        min_length=1,
        description="Xcode version written to project.yml.",
    )

    build_dir: str = Field(
        default="intermediate/build",
        min_length=1,
        description="CONFIGURATION_BUILD_DIR, relative to the project directory.",
    )
    logs_dir: str = Field(
        default="intermediate/logs",
        min_length=1,
        description="Log directory created next to the build directory.",
    )

    # Toolchain binaries (names on PATH or absolute paths)
    xcodegen_bin: str = Field(default="xcodegen", min_length=1)
    xcodebuild_bin: str = Field(default="xcodebuild", min_length=1)
    xcrun_bin: str = Field(default="xcrun", min_length=1)
    ios_deploy_bin: str = Field(default="ios-deploy", min_length=1)
    git_bin: str = Field(default="git", min_length=1)
    xattr_bin: str = Field(default="xattr", min_length=1)

    def toolchain(self) -> dict[str, str]:
        """Map of tool label -> configured program."""

        return {
            "xcodegen": self.xcodegen_bin,
            "xcodebuild": self.xcodebuild_bin,
            "xcrun": self.xcrun_bin,
            "ios-deploy": self.ios_deploy_bin,
            "git": self.git_bin,
            "xattr": self.xattr_bin,
        }
