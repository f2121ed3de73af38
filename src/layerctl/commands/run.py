"""Command: run — load a graph, layer it, and write the report."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from layerctl.commands._base import LayerCommand
from layerctl.commands._params import VERTEX_ID
from layerctl.services.layering import LayeringService

if TYPE_CHECKING:
    from layerctl.commands._context import AppContext


@click.command(
    cls=LayerCommand,
    examples="""\
  layerctl run graph.txt 1 layers.txt
  layerctl run graph.txt 1 layers.txt --locale ru --bom
  layerctl --log-file run.log run graph.txt 42 layers.txt --wrap 20
  layerctl run -- graph.txt -7 layers.txt""",
)
@click.argument("input_path", metavar="INPUT", type=click.Path(path_type=Path))
@click.argument("start", type=VERTEX_ID)
@click.argument("output_path", metavar="OUTPUT", type=click.Path(path_type=Path))
@click.option("--locale", type=click.Choice(["en", "ru"]), default=None, help="Report labels.")
@click.option("--wrap", type=click.IntRange(min=1), default=None, help="Vertices per report row.")
@click.option("--bom/--no-bom", default=None, help="Prefix the report with a byte-order mark.")
@click.pass_obj
def run(
    app: AppContext,
    input_path: Path,
    start: int,
    output_path: Path,
    locale: str | None,
    wrap: int | None,
    bom: bool | None,
) -> None:
    """Write the BFS layers of INPUT, starting at START, to OUTPUT.

    Negative START values need a ``--`` before the arguments.
    """
    overrides = {
        key: value
        for key, value in (("locale", locale), ("wrap", wrap), ("bom", bom))
        if value is not None
    }
    report = app.settings.report.model_copy(update=overrides)
    app.emit(LayeringService(app.workspace).run(input_path, start, output_path, report=report))
