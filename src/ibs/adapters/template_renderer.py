"""Scaffold file rendering.

Why it lives in adapters:
- Jinja2 and the on-disk template files are infrastructure details.
- The core only knows the `ProjectSpec` and which files a project needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ibs.core.domain.models import ProjectSpec


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True)
class ScaffoldFile:
    """One generated file: template name and path relative to the project dir."""

    template: str
    relative_path: str


PROJECT_MANIFEST = ScaffoldFile("project.yml.j2", "project.yml")
INFO_PLIST = ScaffoldFile("Info.plist.j2", "Sources/Info.plist")
LAUNCH_SCREEN = ScaffoldFile("LaunchScreen.storyboard.j2", "Sources/LaunchScreen.storyboard")
APP_DELEGATE = ScaffoldFile("AppDelegate.swift.j2", "Sources/AppDelegate.swift")
GITIGNORE = ScaffoldFile("gitignore.j2", ".gitignore")

SOURCE_FILES: tuple[ScaffoldFile, ...] = (INFO_PLIST, LAUNCH_SCREEN, APP_DELEGATE)


def _get_env() -> Environment:
    # Outputs are written verbatim; trailing newlines are significant.
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_file(file: ScaffoldFile, *, project: ProjectSpec) -> str:
    """Render one scaffold template to a string."""

    template = _get_env().get_template(file.template)
    return template.render(project=project)


def write_file(file: ScaffoldFile, *, project: ProjectSpec, project_dir: Path) -> Path:
    """Render `file` and write it under `project_dir`, creating parent dirs."""

    output_path = project_dir / file.relative_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps "\n" on every platform
    with output_path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(render_file(file, project=project))
    return output_path
