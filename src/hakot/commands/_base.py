"""Click Command base class with --examples support.

When ``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

from typing import Any

import click


class HakotCommand(click.Command):
    """Click Command subclass that accepts an ``examples`` parameter."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)
