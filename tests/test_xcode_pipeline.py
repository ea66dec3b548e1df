from __future__ import annotations

import pytest

from conftest import RecordingRunner
from ibs.core.commands import Toolchain
from ibs.core.domain.models import BuildRequest, DeployRequest, DeployTarget
from ibs.core.errors import (
    CommandFailedError,
    FilesystemError,
    MissingSimulatorIdError,
    ProjectNotFoundError,
)
from ibs.core.services.hooks import PipelineHooks
from ibs.core.services.xcode_pipeline import build_project, deploy_project

XATTR = ["xattr", "-w", "com.apple.xcode.CreatedByBuildSystem", "true", "intermediate/build"]


def test_build_cleans_then_builds(xcode_project, recorder):
    result = build_project(BuildRequest(configuration="Release"), runner=recorder, start=xcode_project)

    assert [argv[:2] for argv in recorder.argvs] == [
        ["xattr", "-w"],
        ["xcodebuild", "clean"],
        ["xcodebuild", "build"],
    ]
    assert recorder.argvs[0] == XATTR
    assert recorder.argvs[1][2:6] == ["-scheme", "Demo", "-configuration", "Release"]
    assert all(inv.cwd == xcode_project.resolve() for inv in recorder.invocations)
    assert (xcode_project / "intermediate" / "build").is_dir()
    assert (xcode_project / "intermediate" / "logs").is_dir()
    assert result.scheme == "Demo"
    assert result.app_path == "intermediate/build/Demo.app"


def test_build_scheme_and_team_overrides(xcode_project, recorder):
    build_project(
        BuildRequest(team_id="T1", scheme="DemoTests"),
        runner=recorder,
        start=xcode_project,
    )

    clean, build = recorder.argvs[1], recorder.argvs[2]
    assert clean[3] == "DemoTests"
    assert "DEVELOPMENT_TEAM=T1" not in clean
    assert build[3] == "DemoTests"
    assert build[-2:] == ["DEVELOPMENT_TEAM=T1", "CODE_SIGN_STYLE=Automatic"]


def test_build_reports_details(xcode_project, recorder):
    details: list[tuple[str, str]] = []

    build_project(
        BuildRequest(team_id="T1"),
        runner=recorder,
        start=xcode_project,
        hooks=PipelineHooks(detail=lambda label, value: details.append((label, value))),
    )

    assert details == [("Configuration", "Debug"), ("Scheme", "Demo"), ("Team ID", "T1")]


def test_build_uses_custom_directories(xcode_project, recorder):
    build_project(
        BuildRequest(),
        runner=recorder,
        toolchain=Toolchain(build_dir="out/build"),
        logs_dir="out/logs",
        start=xcode_project,
    )

    assert (xcode_project / "out" / "build").is_dir()
    assert (xcode_project / "out" / "logs").is_dir()
    assert recorder.argvs[0][-1] == "out/build"


def test_build_stops_at_first_failure(xcode_project):
    runner = RecordingRunner(fail_when=lambda inv: "clean" in inv.args)

    with pytest.raises(CommandFailedError):
        build_project(BuildRequest(), runner=runner, start=xcode_project)

    assert len(runner.invocations) == 2


def test_build_without_project(tmp_path, recorder):
    with pytest.raises(ProjectNotFoundError):
        build_project(BuildRequest(), runner=recorder, start=tmp_path)

    assert recorder.invocations == []


def test_deploy_device(xcode_project, recorder):
    deploy_project(
        DeployRequest(target=DeployTarget.DEVICE, team_id="T1"),
        runner=recorder,
        start=xcode_project,
    )

    assert recorder.argvs[0] == XATTR
    assert recorder.argvs[1][:2] == ["xcodebuild", "build"]
    assert "-allowProvisioningUpdates" in recorder.argvs[1]
    assert "DEVELOPMENT_TEAM=T1" in recorder.argvs[1]
    assert recorder.argvs[2:] == [
        ["xcrun", "xcodebuild", "-runFirstLaunch"],
        ["ios-deploy", "--bundle", "intermediate/build/Demo.app"],
    ]


def test_deploy_device_first_launch_failure_only_warns(xcode_project):
    runner = RecordingRunner(fail_when=lambda inv: "-runFirstLaunch" in inv.args)
    warnings: list[str] = []

    deploy_project(
        DeployRequest(target=DeployTarget.DEVICE),
        runner=runner,
        start=xcode_project,
        hooks=PipelineHooks(warning=warnings.append),
    )

    assert runner.argvs[-1][0] == "ios-deploy"
    assert warnings[0].startswith("Failed to mount developer disk image: Command failed:")
    assert "3. Trust the developer certificate" in warnings


def test_deploy_device_install_failure_raises(xcode_project):
    runner = RecordingRunner(fail_when=lambda inv: inv.program == "ios-deploy")

    with pytest.raises(CommandFailedError) as excinfo:
        deploy_project(DeployRequest(target=DeployTarget.DEVICE), runner=runner, start=xcode_project)

    assert excinfo.value.invocation.program == "ios-deploy"


def test_deploy_simulator(xcode_project, recorder):
    result = deploy_project(
        DeployRequest(target=DeployTarget.SIMULATOR, simulator_id="SIM-1", configuration="Release"),
        runner=recorder,
        bundle_id_prefix="org.acme",
        start=xcode_project,
    )

    build = recorder.argvs[1]
    assert build[:8] == [
        "xcodebuild",
        "build",
        "-scheme",
        "Demo",
        "-configuration",
        "Release",
        "-sdk",
        "iphonesimulator",
    ]
    assert build[8:10] == ["-destination", "id=SIM-1"]
    assert recorder.argvs[2:] == [
        ["xcrun", "simctl", "boot", "SIM-1"],
        ["xcrun", "simctl", "install", "SIM-1", "intermediate/build/Demo.app"],
        ["xcrun", "simctl", "launch", "SIM-1", "org.acme.Demo"],
    ]
    assert result.bundle_id == "org.acme.Demo"


def test_deploy_simulator_boot_failure_aborts(xcode_project):
    runner = RecordingRunner(fail_when=lambda inv: inv.args[:2] == ("simctl", "boot"))

    with pytest.raises(CommandFailedError):
        deploy_project(
            DeployRequest(target=DeployTarget.SIMULATOR, simulator_id="SIM-1"),
            runner=runner,
            start=xcode_project,
        )

    assert runner.argvs[-1] == ["xcrun", "simctl", "boot", "SIM-1"]


def test_deploy_simulator_requires_id_before_touching_anything(xcode_project, recorder):
    with pytest.raises(MissingSimulatorIdError):
        deploy_project(
            DeployRequest(target=DeployTarget.SIMULATOR),
            runner=recorder,
            start=xcode_project,
        )

    assert recorder.invocations == []
    assert not (xcode_project / "intermediate").exists()


def test_blocked_build_directory_raises_filesystem_error(xcode_project, recorder):
    (xcode_project / "intermediate").write_text("", encoding="utf-8")

    with pytest.raises(FilesystemError) as excinfo:
        build_project(BuildRequest(), runner=recorder, start=xcode_project)

    assert str(excinfo.value).startswith("Failed to create build directories")
    assert recorder.invocations == []
