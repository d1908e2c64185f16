"""Subcommand modules for roamclosure.

Provides register_commands(), which imports command modules lazily so
``roamclosure --help`` never loads SQLAlchemy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from roamclosure.commands.closure import closure, refs

    cli.add_command(closure)
    cli.add_command(refs)
