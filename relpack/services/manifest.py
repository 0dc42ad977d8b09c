"""Read release metadata from the project manifest.

The version is looked up only in the first few lines of the manifest,
where a Cargo `[package]` table puts it. A manifest whose leading lines do
not declare a quoted version is rejected rather than packaged with an empty
version in every file name.
"""

from __future__ import annotations

import re
from itertools import islice
from pathlib import Path

from relpack.core.config import DEFAULT_SCAN_LINES
from relpack.core.result import Err, Ok, Result
from relpack.core.structured import as_str_dict, get_str, get_table

from .package_errors import (
    ManifestUnreadable,
    PackageError,
    ProgramNameNotFound,
    VersionInvalid,
    VersionNotFound,
)

__all__ = ["extract_version", "extract_program_name"]

_VERSION_LINE = re.compile(r'^\s*version\s*=\s*"([^"]*)"')

# Must survive as part of a file name on every release platform.
_SAFE_VERSION = re.compile(r"[0-9A-Za-z][0-9A-Za-z._+-]*")


def _read_head(path: Path, limit: int) -> Result[list[str], PackageError]:
    try:
        with path.open(encoding="utf-8") as f:
            return Ok(list(islice(f, limit)))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestUnreadable(path=path, reason=str(e)))


def extract_version(
    manifest_path: Path, *, scan_lines: int = DEFAULT_SCAN_LINES
) -> Result[str, PackageError]:
    """Return the quoted value of the first `version = "..."` line.

    Args:
        manifest_path: Manifest file (e.g. Cargo.toml).
        scan_lines: Number of leading lines searched.

    Returns:
        Ok(version), or Err(VersionNotFound) if no quoted, non-empty version
        appears in the scanned lines, or Err(VersionInvalid) if it cannot be
        used in a file name.
    """
    head = _read_head(manifest_path, scan_lines)
    if isinstance(head, Err):
        return head

    for line in head.value:
        m = _VERSION_LINE.match(line)
        if m is None:
            continue
        value = m.group(1).strip()
        if not value:
            break
        if _SAFE_VERSION.fullmatch(value) is None:
            return Err(VersionInvalid(path=manifest_path, value=value))
        return Ok(value)

    return Err(VersionNotFound(path=manifest_path, scanned_lines=scan_lines))


def extract_program_name(manifest_path: Path) -> Result[str, PackageError]:
    """Return `name` from the manifest's `[package]` table."""
    import tomllib

    try:
        data_obj: object = tomllib.loads(manifest_path.read_bytes().decode("utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestUnreadable(path=manifest_path, reason=str(e)))
    except tomllib.TOMLDecodeError as e:
        return Err(ManifestUnreadable(path=manifest_path, reason=f"invalid TOML: {e}"))

    data = as_str_dict(data_obj)
    package = get_table(data, "package") if data is not None else None
    name = get_str(package, "name") if package is not None else None
    if name is None:
        return Err(ProgramNameNotFound(path=manifest_path))
    return Ok(name)
