"""Subcommand modules for layerctl.

Provides register_commands() which uses deferred imports to keep
``layerctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``graph`` group and the standalone ``run`` command."""
    from layerctl.commands.graph import graph
    from layerctl.commands.run import run

    cli.add_command(run)
    cli.add_command(graph)
