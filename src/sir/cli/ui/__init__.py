from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from sir.cli.ui.formatters import (
    WarningsRenderOptions,
    render_error,
    render_options,
    render_sections,
    render_warnings,
    render_warnings_table,
)

THEME = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "error": "bold red",
        "muted": "dim",
        "path": "cyan",
        "section": "bold magenta",
        "key": "bold",
    }
)


@dataclass(frozen=True)
class UI:
    console: Console
    err_console: Console
    verbose: bool = False


def _configure_logging(console: Console, verbose: bool) -> None:
    root = logging.getLogger("sir")
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=verbose)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)


def get_ui(verbose: bool = False) -> UI:
    console = Console(theme=THEME, highlight=False)
    err_console = Console(theme=THEME, stderr=True, highlight=False)
    _configure_logging(err_console, verbose)
    return UI(console=console, err_console=err_console, verbose=verbose)


__all__ = [
    "THEME",
    "UI",
    "WarningsRenderOptions",
    "get_ui",
    "render_error",
    "render_options",
    "render_sections",
    "render_warnings",
    "render_warnings_table",
]
