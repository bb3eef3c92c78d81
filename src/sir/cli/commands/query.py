from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from pydantic import ValidationError

from sir.cli.ui import UI, get_ui, render_error, render_warnings
from sir.cli.utils.files import read_document, stdin_is_interactive
from sir.core.config import load_parse_options
from sir.core.document import Document
from sir.core.errors import ExitCode
from sir.core.models import ParseOptions

app = typer.Typer(help="Look up sections, keys and values in INI data.")


@dataclass(frozen=True)
class QueryContext:
    ui: UI
    options: ParseOptions


@app.callback()
def query_callback(
    ctx: typer.Context,
    ignore_empty: Optional[bool] = typer.Option(
        None, "--ignore-empty/--keep-empty", help="Drop keys whose value is empty."
    ),
    override_duplicates: Optional[bool] = typer.Option(
        None,
        "--override-duplicates/--first-wins",
        help="Later duplicate keys overwrite earlier ones (default: first wins).",
    ),
    no_quotes: bool = typer.Option(
        False, "--no-quotes", help="Keep double quotes as part of values."
    ),
    no_hash_comments: bool = typer.Option(
        False, "--no-hash-comments", help="Only ';' starts a comment."
    ),
    no_colon: bool = typer.Option(
        False, "--no-colon", help="Only '=' separates key names and values."
    ),
    comment_line_start: bool = typer.Option(
        False, "--comment-line-start", help="Comments only at the start of a line."
    ),
    case_insensitive: bool = typer.Option(
        False, "--case-insensitive", help="Match section and key names ignoring case."
    ),
    no_warnings: bool = typer.Option(
        False, "--no-warnings", help="Skip the diagnostics pass."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    ui = get_ui(verbose=verbose)

    # tri-state: None leaves the config files in charge
    tri_state: Dict[str, Optional[bool]] = {
        "ignore_empty_values": ignore_empty,
        "override_duplicate_keys": override_duplicates,
    }
    # switches can only turn an option on
    switches: Dict[str, bool] = {
        "disable_quotes": no_quotes,
        "disable_hash_comments": no_hash_comments,
        "disable_colon_assignment": no_colon,
        "disable_comment_anywhere": comment_line_start,
        "disable_case_sensitivity": case_insensitive,
        "disable_warnings": no_warnings,
    }
    parse: Dict[str, Any] = {k: v for k, v in tri_state.items() if v is not None}
    parse.update({k: True for k, v in switches.items() if v})
    cli_overrides = {"parse": parse}

    try:
        loaded = load_parse_options(start_dir=Path.cwd(), cli_overrides=cli_overrides)
    except ValidationError as e:
        render_error(ui.err_console, "Invalid sir configuration", detail=str(e))
        raise typer.Exit(code=int(ExitCode.ERROR))

    if ui.verbose:
        ui.err_console.print("[bold]Config sources:[/bold]")
        ui.err_console.print(f"  global:  {loaded.global_path or '-'}")
        ui.err_console.print(f"  project: {loaded.project_path or '-'}")

    # the CLI reports failures through the error slot, so it must stay on
    options = loaded.options.model_copy(update={"disable_errors": False})
    ctx.obj = QueryContext(ui=ui, options=options)


def _open(ctx: typer.Context, path: Optional[Path]) -> Document:
    q: QueryContext = ctx.obj
    if path is None and stdin_is_interactive():
        typer.echo(ctx.get_help())
        raise typer.Exit(code=int(ExitCode.ERROR))

    doc = read_document(path, q.options)
    if doc.has_error():
        render_error(q.ui.err_console, doc.error)
        raise typer.Exit(code=int(ExitCode.ERROR))

    render_warnings(q.ui.err_console, doc.warnings)
    return doc


def _fail_on_error(ctx: typer.Context, doc: Document) -> None:
    if doc.has_error():
        render_error(ctx.obj.ui.err_console, doc.error)
        raise typer.Exit(code=int(ExitCode.ERROR))


def _echo_lines(lines: List[str]) -> None:
    for line in lines:
        typer.echo(line)


FILE_ARGUMENT = typer.Argument(
    None, help="INI file. Reads standard input (pipes/redirection) when omitted."
)
SECTION_OPTION = typer.Option(
    None, "-s", "--section", help="Look only in this section (default: all sections)."
)


@app.command("get")
def get_cmd(
    ctx: typer.Context,
    path: Optional[Path] = FILE_ARGUMENT,
    key: str = typer.Option(..., "-k", "--key", help="Key whose value is printed."),
    section: Optional[str] = SECTION_OPTION,
) -> None:
    """Print the value of a key."""
    doc = _open(ctx, path)
    value = doc.find(key, section=section)
    _fail_on_error(ctx, doc)
    typer.echo(value)


@app.command("values")
def values_cmd(
    ctx: typer.Context,
    path: Optional[Path] = FILE_ARGUMENT,
    section: Optional[str] = SECTION_OPTION,
) -> None:
    """Print every value, or those of one section."""
    doc = _open(ctx, path)
    if section is None:
        _echo_lines(doc.values())
        return
    values = doc.section_key_values(section)
    _fail_on_error(ctx, doc)
    _echo_lines(values or [])


@app.command("keys")
def keys_cmd(
    ctx: typer.Context,
    path: Optional[Path] = FILE_ARGUMENT,
    section: Optional[str] = SECTION_OPTION,
) -> None:
    """Print every key name, or those of one section."""
    doc = _open(ctx, path)
    if section is None:
        _echo_lines(doc.keys())
        return
    names = doc.section_key_names(section)
    _fail_on_error(ctx, doc)
    _echo_lines(names or [])


@app.command("sections")
def sections_cmd(
    ctx: typer.Context,
    path: Optional[Path] = FILE_ARGUMENT,
) -> None:
    """Print section names (the global section is omitted)."""
    doc = _open(ctx, path)
    _echo_lines(doc.sections[1:])
