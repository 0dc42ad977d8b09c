"""Typed configuration loading.

Configuration lives in an optional `relpack.toml` at the project root:

    program = "api-server"
    manifest = "Cargo.toml"
    out_dir = "dist"
    toolchain = "cargo"
    scan_lines = 4
    jobs = 1

Every key is optional. A project without `relpack.toml` packages with the
defaults below and takes the program name from the manifest.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePath

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str

__all__ = [
    "Config",
    "ConfigError",
    "CONFIG_FILENAME",
    "DEFAULT_MANIFEST",
    "DEFAULT_OUT_DIR",
    "DEFAULT_TOOLCHAIN",
    "DEFAULT_SCAN_LINES",
    "load_config",
]

CONFIG_FILENAME = "relpack.toml"

DEFAULT_MANIFEST = "Cargo.toml"
DEFAULT_OUT_DIR = "dist"
DEFAULT_TOOLCHAIN = "cargo"

# The version field of a Cargo manifest sits right under [package] and name.
DEFAULT_SCAN_LINES = 4


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Packaging configuration.

    Attributes:
        program: Executable name; None means read it from the manifest.
        manifest: Manifest path relative to the project root.
        out_dir: Output directory relative to the project root.
        toolchain: Build tool invoked as `<toolchain> build --release --target T`.
        scan_lines: How many leading manifest lines are searched for the version.
        jobs: Number of targets compiled at once (1 = sequential).
    """

    program: str | None = None
    manifest: str = DEFAULT_MANIFEST
    out_dir: str = DEFAULT_OUT_DIR
    toolchain: str = DEFAULT_TOOLCHAIN
    scan_lines: int = DEFAULT_SCAN_LINES
    jobs: int = 1

    def __post_init__(self) -> None:
        _check_out_dir(self.out_dir)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a parsed TOML table.

        Raises:
            ValueError: If `jobs` or `scan_lines` is below 1, or if
                `out_dir` does not name a directory inside the project.
        """
        scan_lines = get_int(data, "scan_lines")
        jobs = get_int(data, "jobs")
        if scan_lines is not None and scan_lines < 1:
            raise ValueError(f"scan_lines must be >= 1 (got {scan_lines})")
        if jobs is not None and jobs < 1:
            raise ValueError(f"jobs must be >= 1 (got {jobs})")

        return cls(
            program=get_str(data, "program"),
            manifest=get_str(data, "manifest") or DEFAULT_MANIFEST,
            out_dir=get_str(data, "out_dir") or DEFAULT_OUT_DIR,
            toolchain=get_str(data, "toolchain") or DEFAULT_TOOLCHAIN,
            scan_lines=scan_lines if scan_lines is not None else DEFAULT_SCAN_LINES,
            jobs=jobs if jobs is not None else 1,
        )


def _check_out_dir(value: str) -> None:
    """Reject output directories that would replace the project or its build cache.

    Publishing swaps the whole directory, so it must be a dedicated
    subdirectory of the project root.
    """
    path = PurePath(value)
    if path.is_absolute() or path.anchor:
        raise ValueError(f"out_dir must be relative to the project root (got {value!r})")

    parts = [p for p in path.parts if p != "."]
    if ".." in parts:
        raise ValueError(f"out_dir must not leave the project root (got {value!r})")
    if not parts:
        raise ValueError(f"out_dir must not be the project root (got {value!r})")
    if parts[0] == "target":
        raise ValueError(f"out_dir must not be inside the toolchain target/ dir (got {value!r})")


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load configuration from `path`.

    A missing file is not an error: the default Config is returned.

    Returns:
        Ok(Config) on success, Err(ConfigError) on unreadable or invalid TOML.
    """
    if not path.exists():
        return Ok(Config())

    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))
