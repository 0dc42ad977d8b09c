"""Import-layering rules for the relpack package."""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def relpack_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_source_files() -> list[Path]:
    root = relpack_root()
    files: list[Path] = []
    for path in sorted(root.rglob("*.py")):
        rel = path.relative_to(root)
        if rel.parts[0] == "test" or "__pycache__" in rel.parts:
            continue
        files.append(path)
    return files


def read_tree(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def parse_imports(path: Path) -> list[ImportRef]:
    imports: list[ImportRef] = []
    for node in ast.walk(read_tree(path)):
        if isinstance(node, ast.Import):
            imports.extend(ImportRef(alias.name, node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and not node.level and node.module:
            imports.append(ImportRef(node.module, node.lineno))
    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def test_subprocess_is_only_used_by_the_process_wrapper() -> None:
    root = relpack_root()
    offenders: list[str] = []
    for path in iter_source_files():
        rel = path.relative_to(root).as_posix()
        if rel == "platform/process.py":
            continue
        for item in parse_imports(path):
            if matches_prefix(item.module, "subprocess"):
                offenders.append(f"{rel}:{item.line}")

    assert not offenders, "subprocess outside platform/process.py:\n" + "\n".join(offenders)


def test_rich_is_only_imported_by_the_console() -> None:
    root = relpack_root()
    offenders: list[str] = []
    for path in iter_source_files():
        rel = path.relative_to(root).as_posix()
        if rel == "output/console.py":
            continue
        for item in parse_imports(path):
            if matches_prefix(item.module, "rich"):
                offenders.append(f"{rel}:{item.line}")

    assert not offenders, "direct rich imports:\n" + "\n".join(offenders)


def test_lower_layers_do_not_import_upper_layers() -> None:
    root = relpack_root()
    forbidden = {
        "core": ("relpack.platform", "relpack.output", "relpack.services", "relpack.cli"),
        "platform": ("relpack.output", "relpack.services", "relpack.cli"),
        "services": ("relpack.cli",),
    }
    offenders: list[str] = []
    for path in iter_source_files():
        rel = path.relative_to(root)
        banned = forbidden.get(rel.parts[0], ())
        for item in parse_imports(path):
            if any(matches_prefix(item.module, prefix) for prefix in banned):
                offenders.append(f"{rel.as_posix()}:{item.line}: {item.module}")

    assert not offenders, "layering violations:\n" + "\n".join(offenders)
