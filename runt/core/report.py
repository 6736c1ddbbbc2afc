"""
Human-readable batch summary (Rich-based).
"""

from __future__ import annotations

import io
from typing import Iterable, List

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .models import ChildOutcome


def _build_table(outcomes: List[ChildOutcome]) -> Table:
    table = Table(expand=False, show_lines=False)
    table.add_column("Executable", no_wrap=True)
    table.add_column("Status")
    table.add_column("Message", overflow="fold")
    for r in sorted(outcomes, key=lambda o: o.executable):
        if r.ok:
            status = Text("ok", style="green")
            msg = ""
        else:
            status = Text("failed", style="red")
            msg = str(r.error)
        table.add_row(r.executable, status, msg)
    return table


def render_summary(outcomes: Iterable[ChildOutcome], width: int = 100) -> str:
    """Render outcomes as a table, sorted by path, and return the plain text."""
    items = list(outcomes)
    failed = sum(1 for r in items if not r.ok)
    header = Text(f"runt: {len(items) - failed}/{len(items)} ok, {failed} failed", style="bold")
    # Only the export is wanted; keep the live render off the terminal.
    console = Console(record=True, width=width, file=io.StringIO())
    console.print(Group(header, _build_table(items)))
    return console.export_text(clear=False)
