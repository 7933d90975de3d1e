"""`choosy init` command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .. import config as cfg
from ..settings import load_settings
from .common import config_option, console, resolve_config_path


def init_command(
    config_path: Optional[Path] = config_option(),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing config file."
    ),
):
    """
    Write a sample config with one category for every model.
    """
    path = resolve_config_path(config_path, load_settings())
    if cfg.write_default_config(path, overwrite=force):
        console.print(f"[green]Wrote sample config to {path}")
    else:
        console.print(f"[yellow]{path} already exists; use --force to overwrite it.")


__all__ = ["init_command"]
