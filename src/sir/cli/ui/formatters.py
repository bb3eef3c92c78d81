from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from sir.core.document import Document
from sir.core.models import ParseOptions, ParseWarning


def _short(s: str, max_len: int = 140) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "…"


# ----------------------------
# Warnings
# ----------------------------

@dataclass(frozen=True)
class WarningsRenderOptions:
    title: Optional[str] = None
    max_rows: Optional[int] = None  # show only first N rows (still prints count)


def render_warnings_table(
    console: Console,
    warnings: Sequence[ParseWarning],
    *,
    opts: Optional[WarningsRenderOptions] = None,
) -> None:
    opts = opts or WarningsRenderOptions()

    if not warnings:
        console.print("[ok]No warnings.[/ok]")
        return

    total = len(warnings)
    show = list(warnings)
    if opts.max_rows is not None:
        show = show[: int(opts.max_rows)]

    table = Table(title=opts.title or f"Warnings ({total})", show_lines=False)
    table.add_column("Source", style="path")
    table.add_column("Line", justify="right", no_wrap=True)
    table.add_column("Col", justify="right", no_wrap=True)
    table.add_column("Message")

    for w in show:
        table.add_row(Text(w.source), str(w.line), str(w.column), Text(_short(w.message, 120)))

    console.print(table)

    if total > len(show):
        console.print(f"[muted]… showing {len(show)} of {total} warnings.[/muted]")


def render_warnings(console: Console, warnings: Sequence[ParseWarning]) -> None:
    """One `name:line:col: warning: msg` line per warning (stderr style)."""
    for w in warnings:
        console.print(Text(str(w), style="warn"))


# ----------------------------
# Errors
# ----------------------------

def render_error(console: Console, message: str, *, detail: Optional[str] = None) -> None:
    msg = Text(message, style="error")
    if detail:
        msg.append(f" ({_short(detail, 160)})", style="muted")
    console.print(msg)


# ----------------------------
# Model / options summaries
# ----------------------------

def render_sections(console: Console, doc: Document) -> None:
    table = Table(title=f"Sections of {doc.name}", show_lines=False)
    table.add_column("Section", style="section")
    table.add_column("Keys", justify="right")
    table.add_column("Ranges")

    for name in doc.sections:
        spans = doc.ranges(name)
        keys = sum(end - start for start, end in spans)
        table.add_row(Text(name), str(keys), Text(", ".join(f"[{s}, {e})" for s, e in spans)))

    console.print(table)


def render_options(
    console: Console,
    options: ParseOptions,
    *,
    sources: Sequence[Path] = (),
    header: str = "Effective parse options",
) -> None:
    table = Table(title=header, show_header=True, show_lines=False)
    table.add_column("Option", style="key", no_wrap=True)
    table.add_column("Value")

    for name, value in options.model_dump().items():
        table.add_row(name, str(value).lower() if isinstance(value, bool) else str(value))

    console.print(table)
    console.print("[bold]Config sources:[/bold]")
    if not sources:
        console.print("  [muted]- (defaults only)[/muted]")
    for s in sources:
        console.print(f"  - [path]{s}[/path]")
