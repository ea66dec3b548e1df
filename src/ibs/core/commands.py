"""Argument lists for every external toolchain call.

Each method returns a `CommandInvocation` and has no side effects, so the
exact argv for every subcommand and configuration can be asserted in tests
without a Mac.
"""

from __future__ import annotations

from dataclasses import dataclass

from ibs.core.config import AppSettings
from ibs.core.domain.models import CommandInvocation

BUILD_SYSTEM_XATTR = "com.apple.xcode.CreatedByBuildSystem"
DEVICE_SDK = "iphoneos"
SIMULATOR_SDK = "iphonesimulator"


def app_bundle_path(build_dir: str, scheme: str) -> str:
    """Relative path of the built `.app`; the product name equals the scheme."""

    return f"{build_dir}/{scheme}.app"


def _signing_args(team_id: str | None) -> list[str]:
    if not team_id:
        return []
    return [f"DEVELOPMENT_TEAM={team_id}", "CODE_SIGN_STYLE=Automatic"]


@dataclass(frozen=True)
class Toolchain:
    """Program names for the external tools plus the shared build directory."""

    xcodegen: str = "xcodegen"
    xcodebuild: str = "xcodebuild"
    xcrun: str = "xcrun"
    ios_deploy: str = "ios-deploy"
    git: str = "git"
    xattr: str = "xattr"
    build_dir: str = "intermediate/build"

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "Toolchain":
        return cls(
            xcodegen=settings.xcodegen_bin,
            xcodebuild=settings.xcodebuild_bin,
            xcrun=settings.xcrun_bin,
            ios_deploy=settings.ios_deploy_bin,
            git=settings.git_bin,
            xattr=settings.xattr_bin,
            build_dir=settings.build_dir,
        )

    def _cmd(self, program: str, *args: str) -> CommandInvocation:
        return CommandInvocation(program=program, args=tuple(args))

    # -- setup -------------------------------------------------------------

    def xcodegen_generate(self) -> CommandInvocation:
        return self._cmd(self.xcodegen, "generate")

    def git_init(self) -> CommandInvocation:
        return self._cmd(self.git, "init")

    def git_add_all(self) -> CommandInvocation:
        return self._cmd(self.git, "add", ".")

    def git_initial_commit(self) -> CommandInvocation:
        return self._cmd(self.git, "commit", "-m", "Initial commit")

    # -- build -------------------------------------------------------------

    def mark_build_dir(self) -> CommandInvocation:
        """Tag the build dir so Xcode's build system is allowed to delete it."""

        return self._cmd(self.xattr, "-w", BUILD_SYSTEM_XATTR, "true", self.build_dir)

    def xcodebuild_clean(self, *, scheme: str, configuration: str) -> CommandInvocation:
        return self._cmd(
            self.xcodebuild,
            "clean",
            "-scheme",
            scheme,
            "-configuration",
            configuration,
            "-sdk",
            DEVICE_SDK,
            f"CONFIGURATION_BUILD_DIR={self.build_dir}",
            "ONLY_ACTIVE_ARCH=NO",
        )

    def xcodebuild_device_build(
        self,
        *,
        scheme: str,
        configuration: str,
        team_id: str | None = None,
    ) -> CommandInvocation:
        return self._cmd(
            self.xcodebuild,
            "build",
            "-scheme",
            scheme,
            "-configuration",
            configuration,
            "-sdk",
            DEVICE_SDK,
            "-allowProvisioningUpdates",
            f"CONFIGURATION_BUILD_DIR={self.build_dir}",
            "ONLY_ACTIVE_ARCH=NO",
            *_signing_args(team_id),
        )

    def xcodebuild_simulator_build(
        self,
        *,
        scheme: str,
        configuration: str,
        simulator_id: str,
        team_id: str | None = None,
    ) -> CommandInvocation:
        return self._cmd(
            self.xcodebuild,
            "build",
            "-scheme",
            scheme,
            "-configuration",
            configuration,
            "-sdk",
            SIMULATOR_SDK,
            "-destination",
            f"id={simulator_id}",
            f"CONFIGURATION_BUILD_DIR={self.build_dir}",
            *_signing_args(team_id),
        )

    # -- deploy ------------------------------------------------------------

    def xcodebuild_first_launch(self) -> CommandInvocation:
        return self._cmd(self.xcrun, "xcodebuild", "-runFirstLaunch")

    def ios_deploy_install(self, app_path: str) -> CommandInvocation:
        return self._cmd(self.ios_deploy, "--bundle", app_path)

    def simctl_boot(self, simulator_id: str) -> CommandInvocation:
        return self._cmd(self.xcrun, "simctl", "boot", simulator_id)

    def simctl_install(self, simulator_id: str, app_path: str) -> CommandInvocation:
        return self._cmd(self.xcrun, "simctl", "install", simulator_id, app_path)

    def simctl_launch(self, simulator_id: str, bundle_id: str) -> CommandInvocation:
        return self._cmd(self.xcrun, "simctl", "launch", simulator_id, bundle_id)
