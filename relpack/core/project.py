"""Project detection and paths.

The project is the directory holding the manifest of the program being
released. It is found, in order, from:
1. The RELPACK_PROJECT_ROOT environment variable
2. The current directory and its parents (first one with a Cargo.toml)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILENAME, DEFAULT_MANIFEST
from .result import Err, Ok, Result

__all__ = [
    "Project",
    "ProjectError",
    "PROJECT_ROOT_ENV",
    "detect_project",
    "find_project_upward",
]

PROJECT_ROOT_ENV = "RELPACK_PROJECT_ROOT"


@dataclass(frozen=True)
class ProjectError:
    """Error when no project can be detected."""

    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Project:
    """A detected project root."""

    root: Path

    @property
    def config_path(self) -> Path:
        """Path to relpack.toml (may not exist)."""
        return self.root / CONFIG_FILENAME

    @property
    def target_dir(self) -> Path:
        """Toolchain build output root (`target/` for Cargo)."""
        return self.root / "target"

    def __str__(self) -> str:
        return str(self.root)


def find_project_upward(start: Path, *, marker: str = DEFAULT_MANIFEST) -> Path | None:
    """Return the first directory from `start` upward that contains `marker`."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / marker).is_file() or (candidate / CONFIG_FILENAME).is_file():
            return candidate
    return None


def detect_project(start: Path | None = None) -> Result[Project, ProjectError]:
    """Detect the project root.

    Args:
        start: Directory to search from (defaults to cwd).

    Returns:
        Ok(Project) if found, Err(ProjectError) otherwise.
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        root = Path(env_root).expanduser().resolve()
        if not root.is_dir():
            return Err(
                ProjectError(
                    f"{PROJECT_ROOT_ENV} is not a directory: {root}",
                    searched_from=root,
                )
            )
        return Ok(Project(root=root))

    start = start or Path.cwd()
    found = find_project_upward(start)
    if found is None:
        return Err(
            ProjectError(
                f"No {DEFAULT_MANIFEST} or {CONFIG_FILENAME} found in {start} or its parents",
                searched_from=start,
            )
        )
    return Ok(Project(root=found))
