"""Filesystem helpers for output directories."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

__all__ = ["remove_path", "reset_dir", "swap_dir"]


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree. Absent paths are ignored."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def reset_dir(path: Path) -> None:
    """Delete `path` recursively if present, then recreate it empty (with parents)."""
    remove_path(path)
    path.mkdir(parents=True)


def swap_dir(src: Path, dest: Path) -> None:
    """Move directory `src` to `dest`, replacing whatever `dest` held.

    The previous `dest` is parked next to it until `src` is in place, so a
    failed rename puts it back.
    """
    backup: Path | None = None
    if dest.exists() or dest.is_symlink():
        backup = dest.with_name(f".{dest.name}.old")
        remove_path(backup)
        os.replace(dest, backup)

    try:
        os.replace(src, dest)
    except OSError:
        if backup is not None:
            os.replace(backup, dest)
        raise

    if backup is not None:
        remove_path(backup)
