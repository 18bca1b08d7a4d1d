"""Subcommand modules for hakot.

Provides register_commands() which uses deferred imports to keep
``hakot --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from hakot.commands.hash_password import hash_password
    from hakot.commands.login import login

    cli.add_command(login)
    cli.add_command(hash_password)
