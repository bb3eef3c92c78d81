from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from sir.cli.ui import (
    WarningsRenderOptions,
    get_ui,
    render_error,
    render_sections,
    render_warnings_table,
)
from sir.core.config import load_parse_options
from sir.core.errors import ExitCode
from sir.core.loader import load

app = typer.Typer(help="Report probable mistakes in INI files.")


@app.command("file")
def check_file_cmd(
    path: Path = typer.Argument(..., help="INI file to check."),
    fail: bool = typer.Option(
        True, "--fail/--no-fail", help="Exit 1 if warnings are present (CI mode)."
    ),
    max_rows: int = typer.Option(
        0, "--max-rows", min=0, help="Show at most N warnings (0 = all)."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Also show the section layout."),
) -> None:
    ui = get_ui(verbose=verbose)
    console = ui.console

    try:
        loaded = load_parse_options(start_dir=path.resolve().parent)
    except ValidationError as e:
        render_error(ui.err_console, "Invalid sir configuration", detail=str(e))
        raise typer.Exit(code=int(ExitCode.ERROR))

    # a check always needs the diagnostics pass and the error slot
    options = loaded.options.model_copy(
        update={"disable_warnings": False, "disable_errors": False}
    )

    doc = load(path, options)
    if doc.has_error():
        render_error(ui.err_console, f"Could not read {path}", detail=doc.error)
        raise typer.Exit(code=int(ExitCode.ERROR))

    warnings = doc.warnings
    render_warnings_table(
        console,
        warnings,
        opts=WarningsRenderOptions(
            title=f"Warnings in {path} ({len(warnings)})",
            max_rows=max_rows or None,
        ),
    )
    if ui.verbose:
        render_sections(console, doc)

    if warnings and fail:
        raise typer.Exit(code=int(ExitCode.WARNINGS))

    raise typer.Exit(code=int(ExitCode.OK))
