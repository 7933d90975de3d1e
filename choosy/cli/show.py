"""`choosy show` command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from .. import config as cfg
from ..engine import CategoryNotFound
from ..schema import Category, GaussianCategory, InventoryCategory, LotteryCategory, WeightedCategory
from ..settings import load_settings
from .common import config_option, console, resolve_config_path


def _category_table(name: str, category: Category) -> Table:
    title = f"{name} ({category.model})"
    if isinstance(category, GaussianCategory):
        title += f", stddev scaling factor {category.stddev_scaling_factor:g}"
    table = Table(title=escape(title))
    table.add_column("Name")

    if isinstance(category, WeightedCategory):
        table.add_column("Weight", justify="right")
        for choice in category.choices:
            table.add_row(escape(choice.name), str(choice.weight))
    elif isinstance(category, InventoryCategory):
        table.add_column("Tickets", justify="right")
        for choice in category.choices:
            table.add_row(escape(choice.name), str(choice.tickets))
    elif isinstance(category, LotteryCategory):
        table.add_column("Tickets", justify="right")
        table.add_column("Weight", justify="right")
        for choice in category.choices:
            table.add_row(escape(choice.name), str(choice.tickets), str(choice.weight))
    else:
        for choice in category.choices:
            table.add_row(escape(choice))
    return table


def show_command(
    category: Optional[str] = typer.Argument(
        None, help="Category to show (omit to show every category)."
    ),
    config_path: Optional[Path] = config_option(),
):
    """
    Print categories and their current state without picking.
    """
    path = resolve_config_path(config_path, load_settings())
    try:
        config = cfg.read_config(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}")
        raise typer.Exit(code=1)

    if category is not None:
        if category not in config:
            console.print(f"[red]{escape(str(CategoryNotFound(category)))}")
            raise typer.Exit(code=1)
        names = [category]
    else:
        names = list(config)

    for name in names:
        console.print(_category_table(name, config[name]))


__all__ = ["show_command"]
