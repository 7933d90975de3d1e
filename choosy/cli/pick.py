"""`choosy pick` command."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from .. import config as cfg
from ..console import ConsoleUI
from ..engine import ChoosyError, Engine
from ..log import setup_logging
from ..settings import load_settings
from .common import config_option, console, resolve_config_path


def pick_command(
    category: str = typer.Argument(..., help="The category to pick from."),
    config_path: Optional[Path] = config_option(),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show the chance table for each candidate."
    ),
    seed: Optional[int] = typer.Option(
        None, help="Seed the random source for a reproducible pick."
    ),
    log_level: Optional[str] = typer.Option(
        None, help="Logging level (default: $CHOOSY_LOG_LEVEL or WARNING)."
    ),
):
    """
    Pick an item from CATEGORY and save the updated config.
    """
    settings = load_settings()
    path = resolve_config_path(config_path, settings)

    try:
        setup_logging((log_level or settings.log_level).upper())
        config = cfg.read_config(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{escape(str(e))}")
        raise typer.Exit(code=1)

    ui = ConsoleUI(console, verbose=verbose or settings.verbose)
    engine = Engine(ui, random.Random(seed) if seed is not None else None)
    try:
        choice = engine.pick(config, category)
    except ChoosyError as e:
        console.print(f"[red]{escape(str(e))}")
        raise typer.Exit(code=1)

    cfg.write_config(path, config)
    console.print(f"[green]{choice}")


__all__ = ["pick_command"]
