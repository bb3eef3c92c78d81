from __future__ import annotations

import typer
from rich.console import Console

from sir import __version__
from sir.cli.commands.check import app as check_app
from sir.cli.commands.config import app as config_app
from sir.cli.commands.query import app as query_app

app = typer.Typer(
    name="sir",
    help="Simple INI Reader: query values, list sections and keys, and check INI files.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"sir {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback
    ),
) -> None:
    pass


# Register command groups
app.add_typer(query_app, name="query")
app.add_typer(check_app, name="check")
app.add_typer(config_app, name="config")


if __name__ == "__main__":  # pragma: no cover
    app()
