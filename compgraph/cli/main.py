"""Click commands: ``discover`` runs an extraction, ``inspect`` summarises a document."""

from __future__ import annotations

import asyncio

import click

from compgraph.app import main as run_main
from compgraph.config import load_config, validate_config, validate_log_level
from compgraph.errors import CompGraphError
from compgraph.graph.serialize import load_document


@click.group()
@click.version_option(package_name="compgraph")
def cli() -> None:
    """Discover and inspect component dependency graphs."""


@cli.command()
@click.option("--root", "root_id", help="Root component id (overrides COMPGRAPH_ROOT_COMPONENT_ID).")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False),
    help="Graph document path (overrides COMPGRAPH_OUTPUT_FILE).",
)
@click.option("--log-level", help="debug, info, warning or error (overrides COMPGRAPH_LOG_LEVEL).")
def discover(root_id: str | None, output_path: str | None, log_level: str | None) -> None:
    """Walk every component reachable from the root and write the graph document."""
    try:
        config = load_config()
        if root_id:
            config.root_component_id = root_id
        if output_path:
            config.output.path = output_path
        if log_level:
            config.log.level = validate_log_level(log_level)
        validate_config(config)
    except CompGraphError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Starting dependency extraction from component {config.root_component_id}")
    graph = asyncio.run(run_main(config))
    click.echo(
        f"Extraction complete: {graph.node_count} components, "
        f"{graph.edge_count} dependencies written to {config.output.path}"
    )


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
def inspect(path: str) -> None:
    """Print node, edge and dangling-edge counts of a graph document."""
    try:
        graph = load_document(path)
    except CompGraphError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"nodes: {graph.node_count}")
    click.echo(f"edges: {graph.edge_count}")
    click.echo(f"dangling edges: {len(graph.dangling_edges())}")
