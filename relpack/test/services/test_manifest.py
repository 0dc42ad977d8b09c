"""Tests for relpack.services.manifest module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relpack.core.result import Err, Ok
from relpack.services.manifest import extract_program_name, extract_version
from relpack.services.package_errors import (
    ManifestUnreadable,
    ProgramNameNotFound,
    VersionInvalid,
    VersionNotFound,
)

CARGO_TOML = """\
[package]
name = "api-server"
version = "1.4.2"
edition = "2021"

[dependencies]
rocket = { version = "0.5.0", features = ["json"] }
"""


def _manifest(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "Cargo.toml"
    path.write_text(content, encoding="utf-8")
    return path


class TestExtractVersion:
    def test_cargo_manifest(self, tmp_path: Path) -> None:
        assert extract_version(_manifest(tmp_path, CARGO_TOML)) == Ok("1.4.2")

    def test_first_declaration_wins(self, tmp_path: Path) -> None:
        path = _manifest(tmp_path, 'version = "2.0.0"\nversion = "3.0.0"\n')
        assert extract_version(path) == Ok("2.0.0")

    def test_ignores_other_version_keys(self, tmp_path: Path) -> None:
        path = _manifest(
            tmp_path,
            '[package]\nrust-version = "1.70"\nname = "x"\nversion = "0.2.0"\n',
        )
        assert extract_version(path) == Ok("0.2.0")

    def test_prerelease_and_build_metadata(self, tmp_path: Path) -> None:
        path = _manifest(tmp_path, '[package]\nversion = "1.0.0-beta.2+build.7"\n')
        assert extract_version(path) == Ok("1.0.0-beta.2+build.7")

    def test_version_beyond_scanned_lines(self, tmp_path: Path) -> None:
        path = _manifest(tmp_path, "[package]\n# a\n# b\n# c\n# d\nversion = \"1.0.0\"\n")

        result = extract_version(path)

        assert isinstance(result, Err)
        assert result.error == VersionNotFound(path=path, scanned_lines=4)

    def test_scan_lines_is_configurable(self, tmp_path: Path) -> None:
        path = _manifest(tmp_path, "[package]\n# a\n# b\n# c\n# d\nversion = \"1.0.0\"\n")
        assert extract_version(path, scan_lines=6) == Ok("1.0.0")

    @pytest.mark.parametrize(
        "line",
        [
            "version = 1.0.0",
            'version = "1.0.0',
            'version = ""',
            "version = '1.0.0'",
        ],
    )
    def test_malformed_version_is_an_error(self, tmp_path: Path, line: str) -> None:
        path = _manifest(tmp_path, f"[package]\n{line}\n")

        result = extract_version(path)

        assert isinstance(result, Err)
        assert isinstance(result.error, VersionNotFound)

    @pytest.mark.parametrize("value", ["1.0/2", "1 0", "../1.0", ".hidden"])
    def test_unsafe_version_is_rejected(self, tmp_path: Path, value: str) -> None:
        path = _manifest(tmp_path, f'version = "{value}"\n')

        result = extract_version(path)

        assert result == Err(VersionInvalid(path=path, value=value))

    def test_missing_manifest(self, tmp_path: Path) -> None:
        result = extract_version(tmp_path / "Cargo.toml")

        assert isinstance(result, Err)
        assert isinstance(result.error, ManifestUnreadable)


class TestExtractProgramName:
    def test_package_name(self, tmp_path: Path) -> None:
        assert extract_program_name(_manifest(tmp_path, CARGO_TOML)) == Ok("api-server")

    def test_name_outside_package_table_is_ignored(self, tmp_path: Path) -> None:
        path = _manifest(
            tmp_path,
            '[package]\nversion = "1.0.0"\n\n[[bin]]\nname = "other"\n',
        )

        result = extract_program_name(path)

        assert result == Err(ProgramNameNotFound(path=path))

    def test_no_package_table(self, tmp_path: Path) -> None:
        path = _manifest(tmp_path, '[workspace]\nmembers = ["a"]\n')
        assert isinstance(extract_program_name(path), Err)

    def test_trailing_comment(self, tmp_path: Path) -> None:
        path = _manifest(tmp_path, '[package]\nname = "api-server"  # bin\nversion = "1.0.0"\n')
        assert extract_program_name(path) == Ok("api-server")

    def test_single_quoted_name(self, tmp_path: Path) -> None:
        path = _manifest(tmp_path, "[package]\nname = 'api-server'\n")
        assert extract_program_name(path) == Ok("api-server")

    def test_package_table_after_other_tables(self, tmp_path: Path) -> None:
        path = _manifest(tmp_path, '[workspace]\n\n[package]\nname = "api-server"\n')
        assert extract_program_name(path) == Ok("api-server")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _manifest(tmp_path, "[package\nname = \n")

        result = extract_program_name(path)

        assert isinstance(result, Err)
        assert isinstance(result.error, ManifestUnreadable)
        assert "invalid TOML" in result.error.reason
