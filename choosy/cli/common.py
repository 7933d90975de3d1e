"""Shared utilities for the choosy CLI.

Holds the console instance, the config option factory, and config path
resolution.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from ..settings import Settings

console = Console()


def config_option() -> Any:
    """Standardized --config option used across commands."""
    return typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the config file (default: $CHOOSY_CONFIG or ~/.config/choosy.yml).",
        dir_okay=False,
    )


def resolve_config_path(config_path: Optional[Path], settings: Settings) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    return settings.config_path


__all__ = ["config_option", "console", "resolve_config_path"]
