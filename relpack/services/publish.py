"""Publish compiled artifacts into the output directory.

Artifacts are first collected into a staging directory next to the output
directory. Only a complete set is swapped into place; if any artifact is
missing, the output directory keeps whatever the last successful release
left there.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path

from relpack.core.result import Err, Ok, Result
from relpack.platform.files import remove_path, reset_dir, swap_dir

from .build import BuildResult
from .matrix import artifact_filename
from .package_errors import ArtifactMissing, PackageError, PublishFailed

__all__ = ["collect_and_rename", "publish", "reset_output_dir", "staging_dir_for"]


def staging_dir_for(out_dir: Path) -> Path:
    return out_dir.with_name(f".{out_dir.name}.staging")


def reset_output_dir(path: Path) -> Result[None, PackageError]:
    """Remove `path` and everything under it, then recreate it empty."""
    try:
        reset_dir(path)
    except OSError as e:
        return Err(PublishFailed(path=path, reason=str(e)))
    return Ok(None)


def collect_and_rename(
    results: Sequence[BuildResult],
    *,
    version: str,
    program: str,
    out_dir: Path,
) -> Result[list[Path], PackageError]:
    """Copy each built artifact into `out_dir` under its release file name.

    Stops at the first artifact that does not exist; files copied before it
    stay in `out_dir`.
    """
    copied: list[Path] = []
    for result in results:
        src = result.artifact
        if not src.is_file():
            return Err(ArtifactMissing(triple=result.target.triple, path=src))

        dest = out_dir / artifact_filename(result.target, program=program, version=version)
        try:
            shutil.copy2(src, dest)
        except OSError as e:
            return Err(PublishFailed(path=dest, reason=str(e)))
        copied.append(dest)
    return Ok(copied)


def publish(
    results: Sequence[BuildResult],
    *,
    version: str,
    program: str,
    out_dir: Path,
) -> Result[list[Path], PackageError]:
    """Replace `out_dir` with exactly one renamed artifact per build result.

    Returns:
        Ok(paths) of the published files inside `out_dir`, in build order.
    """
    staging = staging_dir_for(out_dir)
    reset = reset_output_dir(staging)
    if isinstance(reset, Err):
        return reset

    collected = collect_and_rename(results, version=version, program=program, out_dir=staging)
    if isinstance(collected, Err):
        try:
            remove_path(staging)
        except OSError as e:
            return Err(PublishFailed(path=staging, reason=f"{e} (after: {collected.error})"))
        return collected

    try:
        swap_dir(staging, out_dir)
    except OSError as e:
        return Err(PublishFailed(path=out_dir, reason=str(e)))

    return Ok([out_dir / p.name for p in collected.value])
