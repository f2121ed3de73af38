"""Root CLI group for layerctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from layerctl import __version__
from layerctl.commands import register_commands
from layerctl.commands._base import LayerGroup
from layerctl.commands._context import AppContext
from layerctl.config.models import LoggingConfig
from layerctl.config.settings import LayerSettings


_EXAMPLES = """\
  layerctl run graph.txt 1 layers.txt
  layerctl --json graph layers graph.txt 1
  layerctl -v --log-file layerctl.log run graph.txt 1 layers.txt --locale ru"""


@click.group(cls=LayerGroup, invoke_without_command=True, examples=_EXAMPLES)
@click.version_option(version=__version__, prog_name="layerctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Append log lines to this file.",
)
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    log_file: Path | None,
    config_path: str | None,
) -> None:
    """layerctl — breadth-first layering of undirected graphs."""
    settings = LayerSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        logging=LoggingConfig(file=log_file) if log_file is not None else None,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
