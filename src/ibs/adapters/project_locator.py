"""Locate the `.xcodeproj` that `build` and `deploy` operate on."""

from __future__ import annotations

import logging
from pathlib import Path

from ibs.core.domain.models import XcodeProject
from ibs.core.errors import ProjectNotFoundError, filesystem_errors

logger = logging.getLogger(__name__)

XCODEPROJ_SUFFIX = ".xcodeproj"


def _first_xcodeproj(directory: Path) -> Path | None:
    candidates = sorted(
        p for p in directory.iterdir() if p.is_dir() and p.suffix == XCODEPROJ_SUFFIX
    )
    return candidates[0] if candidates else None


def find_xcode_project(start: Path | None = None) -> XcodeProject:
    """Find an Xcode project in `start` (default: cwd), then in its parent.

    The scheme defaults to the project bundle's stem (`Foo.xcodeproj` -> `Foo`),
    which is what `setup` generates.
    """

    start = (start or Path.cwd()).resolve()
    search = [start]
    if start.parent != start:
        search.append(start.parent)

    for directory in search:
        with filesystem_errors("search for an Xcode project in"):
            found = _first_xcodeproj(directory)
        if found is not None:
            logger.debug("Using Xcode project %s", found)
            return XcodeProject(scheme=found.stem, directory=directory)

    raise ProjectNotFoundError()
