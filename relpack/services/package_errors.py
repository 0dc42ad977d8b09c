from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ManifestUnreadable:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class VersionNotFound:
    path: Path
    scanned_lines: int


@dataclass(frozen=True, slots=True)
class VersionInvalid:
    path: Path
    value: str


@dataclass(frozen=True, slots=True)
class ProgramNameNotFound:
    path: Path
    hint: str = 'Set program = "<name>" in relpack.toml'


@dataclass(frozen=True, slots=True)
class CompileFailed:
    triple: str
    returncode: int
    stderr: str = ""


@dataclass(frozen=True, slots=True)
class ArtifactMissing:
    triple: str
    path: Path


@dataclass(frozen=True, slots=True)
class PublishFailed:
    path: Path
    reason: str


PackageError = (
    ManifestUnreadable
    | VersionNotFound
    | VersionInvalid
    | ProgramNameNotFound
    | CompileFailed
    | ArtifactMissing
    | PublishFailed
)
