"""Command: log a driver in and show their assigned schedule."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hakot.commands._base import HakotCommand
from hakot.services.login import LoginService

if TYPE_CHECKING:
    from hakot.commands._context import AppContext


@click.command(
    cls=HakotCommand,
    examples="""\
  hakot --snapshot export.json login d1
  hakot login d1 --password pw1
  hakot --json login d1
  hakot -v login d1""",
)
@click.argument("username")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    help="Driver password (prompted when omitted).",
)
@click.pass_obj
def login(app: AppContext, username: str, password: str) -> None:
    """Authenticate USERNAME and print the schedule of the driver's trucks."""
    app.emit(LoginService(app.open_store()).login(username, password))
