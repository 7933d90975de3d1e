"""CLI package initializer for choosy.

Exposes the Typer application and the console script target
(`choosy.cli:main`).
"""

from .app import app, main  # noqa: F401

__all__ = ["app", "main"]
