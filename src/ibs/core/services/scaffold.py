"""`setup` workflow: scaffold a new XcodeGen-based iOS project.

Sequence:
1. create `<name>/` and render `project.yml`
2. render the `Sources/` files (Info.plist, launch storyboard, AppDelegate)
3. `xcodegen generate`
4. `git init`, write `.gitignore`, `git add .`, `git commit`

The first failing command aborts the sequence; files already written stay.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ibs.adapters.template_renderer import GITIGNORE, PROJECT_MANIFEST, SOURCE_FILES, write_file
from ibs.core.commands import Toolchain
from ibs.core.domain.models import ProjectSpec
from ibs.core.errors import filesystem_errors
from ibs.core.interfaces.runner import CommandRunner
from ibs.core.services.hooks import PipelineHooks

logger = logging.getLogger(__name__)


@dataclass
class SetupResult:
    project: ProjectSpec
    project_dir: Path
    written: list[Path] = field(default_factory=list)


def setup_project(
    project: ProjectSpec,
    *,
    runner: CommandRunner,
    toolchain: Toolchain | None = None,
    base_dir: Path | None = None,
    hooks: PipelineHooks | None = None,
) -> SetupResult:
    """Create `project.name` under `base_dir` (default: cwd) and initialise it."""

    toolchain = toolchain or Toolchain()
    hooks = hooks or PipelineHooks()
    project_dir = (base_dir or Path.cwd()) / project.name

    with filesystem_errors("create project directory"):
        project_dir.mkdir(parents=True, exist_ok=True)
    result = SetupResult(project=project, project_dir=project_dir)

    hooks.emit_step("Creating project configuration...")
    with filesystem_errors("write project.yml"):
        result.written.append(write_file(PROJECT_MANIFEST, project=project, project_dir=project_dir))

    hooks.emit_step("Creating project structure...")
    with filesystem_errors("write project sources"):
        (project_dir / "Sources").mkdir(exist_ok=True)
        for source in SOURCE_FILES:
            result.written.append(write_file(source, project=project, project_dir=project_dir))
    logger.debug("Wrote %d scaffold files into %s", len(result.written), project_dir)

    hooks.emit_step("Generating Xcode project...")
    runner.run(toolchain.xcodegen_generate().in_dir(project_dir))

    hooks.emit_step("Initializing git repository...")
    runner.run(toolchain.git_init().in_dir(project_dir))
    with filesystem_errors("write .gitignore"):
        result.written.append(write_file(GITIGNORE, project=project, project_dir=project_dir))
    runner.run(toolchain.git_add_all().in_dir(project_dir))
    runner.run(toolchain.git_initial_commit().in_dir(project_dir))

    return result
