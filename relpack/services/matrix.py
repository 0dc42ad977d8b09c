"""Build targets and the release build matrix.

Every release ships one executable per entry of `BUILD_MATRIX`. A target
carries its own human-readable labels, so adding a platform is a single new
row here (plus a `TargetOS`/`TargetArch` member if the labels are new).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

__all__ = [
    "TargetOS",
    "TargetArch",
    "BuildTarget",
    "BUILD_MATRIX",
    "artifact_filename",
]


class TargetOS(Enum):
    """Operating system of a build target; the value is the filename label."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "win"

    def __str__(self) -> str:
        return self.value

    @property
    def exe_suffix(self) -> str:
        """Executable suffix; only Windows has one."""
        return ".exe" if self is TargetOS.WINDOWS else ""


class TargetArch(Enum):
    """CPU architecture of a build target; the value is the filename label."""

    AARCH64 = "aarch64"
    X86_64 = "x86-64"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class BuildTarget:
    """One (OS, architecture, toolchain triple) combination."""

    os: TargetOS
    arch: TargetArch
    triple: str

    def __str__(self) -> str:
        return self.triple

    def exe_name(self, program: str) -> str:
        """Name of the executable the toolchain writes for this target."""
        return f"{program}{self.os.exe_suffix}"

    def artifact_path(self, target_dir: Path, program: str) -> Path:
        """Where the toolchain leaves the release binary for this target."""
        return target_dir / self.triple / "release" / self.exe_name(program)


BUILD_MATRIX: tuple[BuildTarget, ...] = (
    BuildTarget(TargetOS.MACOS, TargetArch.AARCH64, "aarch64-apple-darwin"),
    BuildTarget(TargetOS.MACOS, TargetArch.X86_64, "x86_64-apple-darwin"),
    BuildTarget(TargetOS.LINUX, TargetArch.AARCH64, "aarch64-unknown-linux-gnu"),
    BuildTarget(TargetOS.LINUX, TargetArch.X86_64, "x86_64-unknown-linux-gnu"),
    BuildTarget(TargetOS.WINDOWS, TargetArch.X86_64, "x86_64-pc-windows-gnu"),
)


def artifact_filename(target: BuildTarget, *, program: str, version: str) -> str:
    """Published file name: `{program}_{os}_{arch}_v{version}{ext}`.

    Example: artifact_filename(win_x64, program="api-server", version="1.4.2")
    -> "api-server_win_x86-64_v1.4.2.exe"
    """
    return f"{program}_{target.os}_{target.arch}_v{version}{target.os.exe_suffix}"
