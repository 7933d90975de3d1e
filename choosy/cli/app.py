"""Typer application wiring for the choosy CLI."""
from __future__ import annotations

import typer

from .init import init_command
from .pick import pick_command
from .show import show_command

app = typer.Typer(help="Pick items from lists of choices using various algorithms.")

app.command("pick")(pick_command)
app.command("init")(init_command)
app.command("show")(show_command)


def main():
    app(prog_name="choosy")


if __name__ == "__main__":
    main()
