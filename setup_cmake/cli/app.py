from __future__ import annotations

import typer

from setup_cmake import __version__
from setup_cmake.cli.commands.install import install
from setup_cmake.cli.commands.resolve import resolve

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(install)
app.command()(resolve)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Install CMake releases from GitHub and add them to PATH."""


def main() -> None:
    app()
