"""Compile the target program for every entry of a build matrix.

Each target is one `<toolchain> build --release --target <triple>` call run
from the project root. The first failing target ends the build: nothing is
published unless every target compiled.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from relpack.core.config import DEFAULT_TOOLCHAIN
from relpack.core.project import Project
from relpack.core.result import Err, Ok, Result
from relpack.output.console import ConsoleProtocol
from relpack.platform.process import ProcessError, run, run_silent

from .matrix import BuildTarget
from .package_errors import CompileFailed, PackageError

__all__ = ["BuildResult", "build_all", "build_command"]


@dataclass(frozen=True, slots=True)
class BuildResult:
    """A target that compiled, and where its binary is expected."""

    target: BuildTarget
    artifact: Path


def build_command(toolchain: str, target: BuildTarget) -> list[str]:
    return [toolchain, "build", "--release", "--target", target.triple]


def _compile_failed(target: BuildTarget, error: ProcessError) -> Err[PackageError]:
    return Err(
        CompileFailed(
            triple=target.triple,
            returncode=error.returncode,
            stderr=error.stderr,
        )
    )


def _build_sequential(
    matrix: Sequence[BuildTarget],
    *,
    project: Project,
    toolchain: str,
    console: ConsoleProtocol,
) -> Result[None, PackageError]:
    for target in matrix:
        cmd = build_command(toolchain, target)
        console.command(cmd)
        result = run_silent(cmd, cwd=project.root)
        if isinstance(result, Err):
            return _compile_failed(target, result.error)
    return Ok(None)


def _build_parallel(
    matrix: Sequence[BuildTarget],
    *,
    project: Project,
    toolchain: str,
    jobs: int,
    console: ConsoleProtocol,
) -> Result[None, PackageError]:
    commands = [build_command(toolchain, target) for target in matrix]
    for cmd in commands:
        console.command(cmd)

    # Output is captured: concurrent builds would interleave on the terminal.
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        outcomes = list(pool.map(lambda cmd: run(cmd, cwd=project.root), commands))

    for target, outcome in zip(matrix, outcomes, strict=True):
        if isinstance(outcome, Err):
            return _compile_failed(target, outcome.error)
    return Ok(None)


def build_all(
    matrix: Sequence[BuildTarget],
    *,
    project: Project,
    program: str,
    console: ConsoleProtocol,
    toolchain: str = DEFAULT_TOOLCHAIN,
    jobs: int = 1,
) -> Result[list[BuildResult], PackageError]:
    """Compile every target in `matrix`.

    With `jobs == 1` targets build one after another in matrix order and the
    toolchain output goes straight to the terminal. With `jobs > 1` they
    build concurrently; all of them finish before the outcome is decided and
    the reported failure is the first failing target in matrix order.

    Returns:
        Ok([BuildResult, ...]) in matrix order, or Err(CompileFailed).
    """
    if jobs > 1 and len(matrix) > 1:
        outcome = _build_parallel(
            matrix, project=project, toolchain=toolchain, jobs=jobs, console=console
        )
    else:
        outcome = _build_sequential(
            matrix, project=project, toolchain=toolchain, console=console
        )
    if isinstance(outcome, Err):
        return outcome

    return Ok(
        [
            BuildResult(target=t, artifact=t.artifact_path(project.target_dir, program))
            for t in matrix
        ]
    )
