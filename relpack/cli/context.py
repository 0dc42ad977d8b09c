from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relpack.core.config import Config, load_config
from relpack.core.errors import ErrorCode
from relpack.core.project import Project, detect_project
from relpack.core.result import Err
from relpack.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    config: Config
    console: ConsoleProtocol


def build_context(project_root: Path | None = None) -> CLIContext:
    console = RichConsole()

    if project_root is not None:
        project = Project(root=project_root)
    else:
        project_result = detect_project()
        if isinstance(project_result, Err):
            console.error(project_result.error.message)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        project = project_result.value

    config_result = load_config(project.config_path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(project=project, config=config_result.value, console=console)
