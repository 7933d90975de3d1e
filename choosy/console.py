"""
Terminal implementation of the choosy UI using rich tables and typer prompts.
"""
from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from .ui import Cell, Table


def format_cell(cell: Cell) -> str:
    if isinstance(cell, float):
        return f"{cell:.2f}"
    return escape(str(cell))


class ConsoleUI:
    def __init__(self, console: Console, verbose: bool = False):
        self.console = console
        self.verbose = verbose

    def should_display_table(self) -> bool:
        return self.verbose

    def display_table(self, table: Table) -> None:
        show_footer = bool(table.footer)
        rendered = RichTable(show_footer=show_footer)
        sample = table.rows[0].cells if table.rows else table.footer
        for i, header in enumerate(table.header):
            numeric = i < len(sample) and isinstance(sample[i], (int, float))
            footer = format_cell(table.footer[i]) if i < len(table.footer) else ""
            rendered.add_column(
                format_cell(header),
                footer=footer,
                justify="right" if numeric else "left",
            )
        for row in table.rows:
            rendered.add_row(
                *(format_cell(c) for c in row.cells),
                style="bold yellow" if row.chosen else None,
            )
        self.console.print(rendered)

    def notify(self, message: str) -> None:
        self.console.print(message)

    def confirm(self, choice: str) -> bool:
        return typer.confirm(f"Choice is {choice}. Accept?", default=True)


__all__ = ["ConsoleUI", "format_cell"]
