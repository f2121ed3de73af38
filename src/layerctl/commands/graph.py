"""Command group: inspect a graph without writing a report."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from layerctl.commands._base import LayerGroup
from layerctl.commands._params import VERTEX_ID
from layerctl.services.graph import GraphService
from layerctl.services.layering import LayeringService

if TYPE_CHECKING:
    from layerctl.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  layerctl graph layers graph.txt 1
  layerctl --json graph layers graph.txt 1
  layerctl graph stats graph.txt"""


@click.group(cls=LayerGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Inspect graphs and their layers."""


@graph.command(
    examples="""\
  layerctl graph layers graph.txt 1
  layerctl -q graph layers graph.txt 1
  layerctl --json graph layers graph.txt 1"""
)
@click.argument("input_path", metavar="INPUT", type=click.Path(path_type=Path))
@click.argument("start", type=VERTEX_ID)
@click.pass_obj
def layers(app: AppContext, input_path: Path, start: int) -> None:
    """Print the BFS layers of INPUT starting at START."""
    app.emit(LayeringService(app.workspace).layers(input_path, start))


@graph.command(
    examples="""\
  layerctl graph stats graph.txt
  layerctl --json graph stats graph.txt"""
)
@click.argument("input_path", metavar="INPUT", type=click.Path(path_type=Path))
@click.pass_obj
def stats(app: AppContext, input_path: Path) -> None:
    """Summarize vertex, edge, and degree figures of INPUT."""
    app.emit(GraphService(app.workspace).stats(input_path))
