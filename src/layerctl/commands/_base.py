"""Click base classes with an ``--examples`` flag.

``--examples`` prints the usage examples given at declaration time and
exits, keeping ``--help`` short.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager ``--examples`` option when ``examples=`` is given."""

    params: list[click.Parameter]

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
        if not value or not self.examples:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class LayerCommand(_ExamplesMixin, click.Command):
    """Click Command that accepts ``examples=``."""


class LayerGroup(_ExamplesMixin, click.Group):
    """Click Group that accepts ``examples=``.

    Subcommands created with ``@group.command`` are :class:`LayerCommand`.
    """

    command_class = LayerCommand
