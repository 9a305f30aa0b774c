"""BrandPilot CLI entry point: Click group with subcommands."""

import logging
import sys

import click

from brandpilot import __version__
from brandpilot.config import BrandPilotConfig
from brandpilot.errors import PipelineLoadError
from brandpilot.model.agent import AGENT_TYPE_LABELS


@click.group()
@click.version_option(version=__version__, prog_name="brandpilot")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (defaults to BRANDPILOT_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """BrandPilot - run social-media agent pipelines node by node."""
    if log_level is None:
        log_level = BrandPilotConfig.from_env().log_level
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("pipeline_file", type=click.Path(exists=True))
def order(pipeline_file: str) -> None:
    """Print the execution order of a pipeline file."""
    from brandpilot.pipeline.loader import load_pipeline
    from brandpilot.pipeline.order import resolve_execution_order

    try:
        pipeline = load_pipeline(pipeline_file)
    except PipelineLoadError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for i, node_id in enumerate(resolve_execution_order(pipeline.nodes, pipeline.connections), 1):
        node = pipeline.node(node_id)
        label = AGENT_TYPE_LABELS.get(node.type, node.type) if node else "?"
        click.echo(f"{i}. {node_id} ({label})")


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def serve(host: str | None, port: int | None, debug: bool) -> None:
    """Start the execute-node API server."""
    from dataclasses import replace

    from brandpilot.web.app import create_app

    config = BrandPilotConfig.from_env()
    config = replace(config, host=host or config.host, port=port or config.port)

    app = create_app(config=config)
    click.echo(f"Starting BrandPilot on {config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=debug)


from brandpilot.cli.run import run  # noqa: E402

cli.add_command(run)
