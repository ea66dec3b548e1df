from __future__ import annotations

import pytest

from conftest import RecordingRunner
from ibs.core.domain.models import ProjectSpec
from ibs.core.errors import CommandFailedError, FilesystemError
from ibs.core.services.hooks import PipelineHooks
from ibs.core.services.scaffold import setup_project


def _spec() -> ProjectSpec:
    return ProjectSpec.create(name="Demo", team_id="ABCDE12345")


def test_setup_writes_files_and_runs_commands_in_order(tmp_path, recorder):
    steps: list[str] = []

    result = setup_project(
        _spec(),
        runner=recorder,
        base_dir=tmp_path,
        hooks=PipelineHooks(step=steps.append),
    )

    project_dir = tmp_path / "Demo"
    assert result.project_dir == project_dir
    assert recorder.argvs == [
        ["xcodegen", "generate"],
        ["git", "init"],
        ["git", "add", "."],
        ["git", "commit", "-m", "Initial commit"],
    ]
    assert all(inv.cwd == project_dir for inv in recorder.invocations)

    for relative in (
        "project.yml",
        "Sources/Info.plist",
        "Sources/LaunchScreen.storyboard",
        "Sources/AppDelegate.swift",
        ".gitignore",
    ):
        assert (project_dir / relative).is_file(), relative
    assert len(result.written) == 5
    assert steps[0] == "Creating project configuration..."
    assert "Generating Xcode project..." in steps


def test_setup_accepts_existing_directory(tmp_path, recorder):
    (tmp_path / "Demo").mkdir()

    setup_project(_spec(), runner=recorder, base_dir=tmp_path)

    assert (tmp_path / "Demo" / "project.yml").is_file()


def test_xcodegen_failure_aborts_before_git(tmp_path):
    runner = RecordingRunner(fail_when=lambda inv: inv.program == "xcodegen")

    with pytest.raises(CommandFailedError) as excinfo:
        setup_project(_spec(), runner=runner, base_dir=tmp_path)

    assert excinfo.value.returncode == 65
    assert runner.argvs == [["xcodegen", "generate"]]
    # templates written before the failure stay; no rollback
    assert (tmp_path / "Demo" / "project.yml").is_file()
    assert not (tmp_path / "Demo" / ".gitignore").exists()


def test_gitignore_is_written_after_git_init(tmp_path):
    seen: list[bool] = []

    class GitignoreWatcher(RecordingRunner):
        def run(self, invocation):
            seen.append((tmp_path / "Demo" / ".gitignore").exists())
            super().run(invocation)

    setup_project(_spec(), runner=GitignoreWatcher(), base_dir=tmp_path)

    # xcodegen, git init, git add, git commit
    assert seen == [False, False, True, True]


def test_existing_file_with_project_name_raises_filesystem_error(tmp_path, recorder):
    (tmp_path / "Demo").write_text("", encoding="utf-8")

    with pytest.raises(FilesystemError) as excinfo:
        setup_project(_spec(), runner=recorder, base_dir=tmp_path)

    assert isinstance(excinfo.value.__cause__, OSError)
    assert excinfo.value.path == str(tmp_path / "Demo")
    assert recorder.invocations == []
