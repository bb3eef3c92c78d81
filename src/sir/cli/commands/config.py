from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from sir.cli.ui import get_ui, render_error, render_options
from sir.cli.utils.files import ensure_dir, write_file
from sir.core.config import DEFAULT_CONFIG_TOML, PROJECT_CONFIG_FILE, load_parse_options
from sir.core.errors import ExitCode

app = typer.Typer(help="Create and inspect sir configuration.")


@app.command("init")
def init_config_cmd(
    path: Path = typer.Argument(Path("."), help="Project directory to initialize."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config."),
) -> None:
    """Write a project-local .sir/config.toml with every parse option."""
    target = path.resolve() / PROJECT_CONFIG_FILE
    ensure_dir(target.parent)

    if write_file(target, DEFAULT_CONFIG_TOML, force=force):
        typer.echo(f"Initialized {target}")
    else:
        typer.echo(f"{target} already exists (use --force to overwrite)")


@app.command("show")
def show_config_cmd(
    path: Path = typer.Argument(Path("."), help="Directory to resolve project config from."),
) -> None:
    """Print the effective parse options and the files they came from."""
    ui = get_ui()
    try:
        loaded = load_parse_options(start_dir=path.resolve())
    except ValidationError as e:
        render_error(ui.err_console, "Invalid sir configuration", detail=str(e))
        raise typer.Exit(code=int(ExitCode.ERROR))

    render_options(ui.console, loaded.options, sources=loaded.sources)
