"""`build` and `deploy` workflows.

Both start the same way: locate the `.xcodeproj` (cwd, then parent), create
`intermediate/logs` and `intermediate/build` next to it and tag the build
directory for Xcode. Every command then runs inside the project directory.

Deploy branches on the target:
- device: build for `iphoneos`, try `xcodebuild -runFirstLaunch` (a failure
  there only warns), then `ios-deploy --bundle`.
- simulator: build for `iphonesimulator`, then `simctl boot`, `install`,
  `launch`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ibs.adapters.project_locator import find_xcode_project
from ibs.core.commands import Toolchain, app_bundle_path
from ibs.core.domain.models import BuildRequest, DeployRequest, DeployTarget, XcodeProject
from ibs.core.errors import IbsError, MissingSimulatorIdError, filesystem_errors
from ibs.core.interfaces.runner import CommandRunner
from ibs.core.services.hooks import PipelineHooks

logger = logging.getLogger(__name__)

DEFAULT_LOGS_DIR = "intermediate/logs"

FIRST_LAUNCH_HINT: tuple[str, ...] = (
    "You might need to:",
    "1. Open Xcode",
    "2. Connect your device",
    "3. Trust the developer certificate",
    "4. Let Xcode install the necessary support files",
)


@dataclass
class BuildResult:
    """Output of a build or deploy invocation."""

    project: XcodeProject
    scheme: str
    app_path: str
    bundle_id: str | None = None


def _prepare_workspace(
    *,
    runner: CommandRunner,
    toolchain: Toolchain,
    logs_dir: str,
    start: Path | None,
    hooks: PipelineHooks,
) -> XcodeProject:
    project = find_xcode_project(start)

    hooks.emit_step("Creating build directories...")
    with filesystem_errors("create build directories"):
        (project.directory / logs_dir).mkdir(parents=True, exist_ok=True)
        (project.directory / toolchain.build_dir).mkdir(parents=True, exist_ok=True)
    runner.run(toolchain.mark_build_dir().in_dir(project.directory))
    return project


def _emit_build_details(hooks: PipelineHooks, request: BuildRequest, scheme: str) -> None:
    hooks.emit_detail("Configuration", request.configuration)
    hooks.emit_detail("Scheme", scheme)
    if request.team_id:
        hooks.emit_detail("Team ID", request.team_id)


def build_project(
    request: BuildRequest,
    *,
    runner: CommandRunner,
    toolchain: Toolchain | None = None,
    logs_dir: str = DEFAULT_LOGS_DIR,
    start: Path | None = None,
    hooks: PipelineHooks | None = None,
) -> BuildResult:
    """Clean and build the located project for iOS devices."""

    toolchain = toolchain or Toolchain()
    hooks = hooks or PipelineHooks()

    project = _prepare_workspace(
        runner=runner, toolchain=toolchain, logs_dir=logs_dir, start=start, hooks=hooks
    )
    scheme = request.scheme or project.scheme

    hooks.emit_step("Building for iOS device...")
    _emit_build_details(hooks, request, scheme)

    hooks.emit_step("Cleaning previous build...")
    runner.run(
        toolchain.xcodebuild_clean(scheme=scheme, configuration=request.configuration).in_dir(
            project.directory
        )
    )

    hooks.emit_step("Building project...")
    runner.run(
        toolchain.xcodebuild_device_build(
            scheme=scheme,
            configuration=request.configuration,
            team_id=request.team_id,
        ).in_dir(project.directory)
    )

    return BuildResult(
        project=project,
        scheme=scheme,
        app_path=app_bundle_path(toolchain.build_dir, scheme),
    )


def deploy_project(
    request: DeployRequest,
    *,
    runner: CommandRunner,
    toolchain: Toolchain | None = None,
    bundle_id_prefix: str = "com.example",
    logs_dir: str = DEFAULT_LOGS_DIR,
    start: Path | None = None,
    hooks: PipelineHooks | None = None,
) -> BuildResult:
    """Build the located project and install it on a device or simulator."""

    toolchain = toolchain or Toolchain()
    hooks = hooks or PipelineHooks()

    simulator_id = request.simulator_id
    if request.target is DeployTarget.SIMULATOR and not simulator_id:
        raise MissingSimulatorIdError()

    project = _prepare_workspace(
        runner=runner, toolchain=toolchain, logs_dir=logs_dir, start=start, hooks=hooks
    )
    scheme = request.scheme or project.scheme
    result = BuildResult(
        project=project,
        scheme=scheme,
        app_path=app_bundle_path(toolchain.build_dir, scheme),
    )

    if request.target is DeployTarget.DEVICE:
        _deploy_to_device(request, result, runner=runner, toolchain=toolchain, hooks=hooks)
    else:
        # the product name equals the scheme, and setup derives the bundle id from it
        result.bundle_id = f"{bundle_id_prefix}.{scheme}"
        _deploy_to_simulator(
            request,
            result,
            simulator_id=simulator_id,
            bundle_id=result.bundle_id,
            runner=runner,
            toolchain=toolchain,
            hooks=hooks,
        )

    return result


def _deploy_to_device(
    request: DeployRequest,
    result: BuildResult,
    *,
    runner: CommandRunner,
    toolchain: Toolchain,
    hooks: PipelineHooks,
) -> None:
    cwd = result.project.directory

    hooks.emit_step("Building and deploying to iOS device...")
    _emit_build_details(hooks, request, result.scheme)
    runner.run(
        toolchain.xcodebuild_device_build(
            scheme=result.scheme,
            configuration=request.configuration,
            team_id=request.team_id,
        ).in_dir(cwd)
    )

    hooks.emit_step("Mounting developer disk image...")
    try:
        runner.run(toolchain.xcodebuild_first_launch().in_dir(cwd))
    except IbsError as exc:
        logger.debug("runFirstLaunch failed: %s", exc)
        hooks.emit_warning(f"Failed to mount developer disk image: {exc}")
        for line in FIRST_LAUNCH_HINT:
            hooks.emit_warning(line)

    hooks.emit_step("Installing app on device...")
    runner.run(toolchain.ios_deploy_install(result.app_path).in_dir(cwd))


def _deploy_to_simulator(
    request: DeployRequest,
    result: BuildResult,
    *,
    simulator_id: str,
    bundle_id: str,
    runner: CommandRunner,
    toolchain: Toolchain,
    hooks: PipelineHooks,
) -> None:
    cwd = result.project.directory

    hooks.emit_step("Building and deploying to iOS simulator...")
    _emit_build_details(hooks, request, result.scheme)
    hooks.emit_detail("Simulator ID", simulator_id)
    runner.run(
        toolchain.xcodebuild_simulator_build(
            scheme=result.scheme,
            configuration=request.configuration,
            simulator_id=simulator_id,
            team_id=request.team_id,
        ).in_dir(cwd)
    )

    hooks.emit_step("Booting simulator...")
    runner.run(toolchain.simctl_boot(simulator_id).in_dir(cwd))

    hooks.emit_step("Installing app to simulator...")
    runner.run(toolchain.simctl_install(simulator_id, result.app_path).in_dir(cwd))

    hooks.emit_step("Launching app...")
    runner.run(toolchain.simctl_launch(simulator_id, bundle_id).in_dir(cwd))
