from __future__ import annotations

from pathlib import Path

import typer

from relpack import __version__
from relpack.cli.context import build_context
from relpack.core.errors import ErrorCode
from relpack.services.packager import PackagerService

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command()
def package(
    show_version: bool = typer.Option(False, "--version", help="Show version and exit."),
    project: Path | None = typer.Option(
        None,
        "--project",
        help="Project root (overrides auto detection)",
    ),
) -> None:
    """Build every release target and publish versioned binaries to dist/."""
    if show_version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    root: Path | None = None
    if project is not None:
        try:
            root = project.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --project: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        if not root.is_dir():
            typer.echo(f"error: --project '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    ctx = build_context(root)
    service = PackagerService(project=ctx.project, config=ctx.config, console=ctx.console)
    raise typer.Exit(code=service.run())


def main() -> None:
    app()
