"""End-to-end release packaging.

    version  ->  build every target  ->  publish renamed artifacts

Each phase returns a Result; the first Err ends the run and is rendered by
`run()`. The output directory is only written once every target compiled.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from relpack.core.config import Config
from relpack.core.errors import ErrorCode
from relpack.core.project import Project
from relpack.core.result import Err, Ok, Result
from relpack.output.console import ConsoleProtocol
from relpack.output.errors import package_error_exit_code, print_package_error

from .build import build_all
from .manifest import extract_program_name, extract_version
from .matrix import BUILD_MATRIX, BuildTarget
from .package_errors import PackageError
from .publish import publish


@dataclass(frozen=True, slots=True)
class Release:
    """What a successful run produced."""

    program: str
    version: str
    files: tuple[Path, ...]


class PackagerService:
    """Packages one release of the project's program for a build matrix."""

    def __init__(
        self,
        *,
        project: Project,
        config: Config,
        console: ConsoleProtocol,
        matrix: Sequence[BuildTarget] = BUILD_MATRIX,
    ) -> None:
        self._project = project
        self._config = config
        self._console = console
        self._matrix = tuple(matrix)

    @property
    def manifest_path(self) -> Path:
        return self._project.root / self._config.manifest

    @property
    def out_dir(self) -> Path:
        return self._project.root / self._config.out_dir

    def program_name(self) -> Result[str, PackageError]:
        if self._config.program:
            return Ok(self._config.program)
        return extract_program_name(self.manifest_path)

    def package(self) -> Result[Release, PackageError]:
        """Run the whole pipeline and return the published release."""
        program = self.program_name()
        if isinstance(program, Err):
            return program

        version = extract_version(self.manifest_path, scan_lines=self._config.scan_lines)
        if isinstance(version, Err):
            return version
        self._console.header(f"{program.value} v{version.value}")

        self._console.header(f"Building {len(self._matrix)} targets")
        built = build_all(
            self._matrix,
            project=self._project,
            program=program.value,
            console=self._console,
            toolchain=self._config.toolchain,
            jobs=self._config.jobs,
        )
        if isinstance(built, Err):
            return built

        self._console.header(f"Publishing to {self.out_dir}")
        published = publish(
            built.value,
            version=version.value,
            program=program.value,
            out_dir=self.out_dir,
        )
        if isinstance(published, Err):
            return published

        return Ok(
            Release(
                program=program.value,
                version=version.value,
                files=tuple(published.value),
            )
        )

    def run(self) -> int:
        """Package and report; returns the process exit code."""
        match self.package():
            case Ok(release):
                for path in release.files:
                    self._console.success(str(path))
                return int(ErrorCode.OK)
            case Err(error):
                print_package_error(error, self._console)
                return package_error_exit_code(error)
