"""
The interface the selection engine uses to talk to a human.

The engine never renders anything itself: it builds ``Table`` values and asks a
``UI`` implementation to show them, to relay messages, and to accept or reject
candidates.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Protocol, Union

Cell = Union[str, int, float]


@dataclass
class Row:
    cells: List[Cell]
    chosen: bool = False


@dataclass
class Table:
    header: List[Cell]
    rows: List[Row] = field(default_factory=list)
    footer: List[Cell] = field(default_factory=list)


class UI(Protocol):
    def should_display_table(self) -> bool:
        """Return True if a table of the candidates should be built and shown."""
        ...

    def display_table(self, table: Table) -> None:
        ...

    def notify(self, message: str) -> None:
        ...

    def confirm(self, choice: str) -> bool:
        """Ask whether ``choice`` is acceptable."""
        ...


__all__ = ["Cell", "Row", "Table", "UI"]
