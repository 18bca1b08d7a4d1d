"""Command: produce a bcrypt hash for a driver record's ``password`` field."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hakot.commands._base import HakotCommand
from hakot.domain.credentials import hash_password as make_hash

if TYPE_CHECKING:
    from hakot.commands._context import AppContext


@click.command(
    "hash-password",
    cls=HakotCommand,
    examples="""\
  hakot hash-password
  hakot hash-password --password pw1 --rounds 10""",
)
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password to hash (prompted twice when omitted).",
)
@click.option(
    "--rounds",
    type=click.IntRange(4, 31),
    default=None,
    help="bcrypt cost factor (default: [auth] bcrypt_rounds).",
)
@click.pass_obj
def hash_password(app: AppContext, password: str, rounds: int | None) -> None:
    """Print a bcrypt hash of PASSWORD."""
    password = password.strip()
    if not password:
        raise click.BadParameter("Password cannot be blank.", param_hint="--password")
    try:
        digest = make_hash(password, rounds=rounds or app.settings.auth.bcrypt_rounds)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(digest)
