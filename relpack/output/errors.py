"""Error presentation utilities.

Centralized rendering of packaging errors and their exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relpack.core.errors import ErrorCode
from relpack.output.console import Style
from relpack.services.package_errors import (
    ArtifactMissing,
    CompileFailed,
    ManifestUnreadable,
    PackageError,
    ProgramNameNotFound,
    PublishFailed,
    VersionInvalid,
    VersionNotFound,
)

if TYPE_CHECKING:
    from relpack.output.console import ConsoleProtocol

__all__ = ["print_package_error", "package_error_exit_code"]


def print_package_error(error: PackageError, console: ConsoleProtocol) -> None:
    """Print a packaging error with a hint where one helps."""
    match error:
        case ManifestUnreadable(path=path, reason=reason):
            console.error(f"cannot read manifest {path}: {reason}")
        case VersionNotFound(path=path, scanned_lines=n):
            console.error(f'no version = "..." line in the first {n} lines of {path}')
            console.print("hint: declare the version near the top of the manifest", Style.DIM)
        case VersionInvalid(path=path, value=value):
            console.error(f"version {value!r} in {path} cannot be used in a file name")
        case ProgramNameNotFound(path=path, hint=hint):
            console.error(f"no [package] name in {path}")
            console.print(f"hint: {hint}", Style.DIM)
        case CompileFailed(triple=triple, returncode=rc, stderr=stderr):
            console.error(f"{triple}: build failed (exit {rc})")
            if stderr.strip():
                console.print(stderr.rstrip(), Style.DIM)
            console.print("nothing was published", Style.DIM)
        case ArtifactMissing(triple=triple, path=path):
            console.error(f"{triple}: artifact not found: {path}")
            console.print("nothing was published", Style.DIM)
        case PublishFailed(path=path, reason=reason):
            console.error(f"cannot publish to {path}: {reason}")


def package_error_exit_code(error: PackageError) -> int:
    """Get the process exit code for a packaging error."""
    match error:
        case VersionNotFound() | VersionInvalid() | ProgramNameNotFound():
            return int(ErrorCode.USER_ERROR)
        case CompileFailed():
            return int(ErrorCode.BUILD_ERROR)
        case ManifestUnreadable() | ArtifactMissing() | PublishFailed():
            return int(ErrorCode.IO_ERROR)
