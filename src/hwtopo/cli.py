import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError

from domain_models.config import TopologyConfig
from hwtopo.codec import encode
from hwtopo.config import configure_logging
from hwtopo.exceptions import TopologyError
from hwtopo.exporters.text import stream_tree
from hwtopo.topology import Topology
from hwtopo.utils.io import load_topology

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="hwtopo",
    help="hwtopo: inspect and normalize hierarchical hardware topology documents.",
    add_completion=False,
)

InputFile = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Path to the topology document (JSON).",
    ),
]


def _fail_with_error(message: str) -> NoReturn:
    """Centralized error handling: Log error and exit with code 1."""
    typer.echo(message, err=True)
    logger.error(message)
    raise typer.Exit(code=1)


def _load_config(**overrides: object) -> TopologyConfig:
    """Build the configuration from the environment plus command line overrides."""
    try:
        config = TopologyConfig.default()
        updates = {key: value for key, value in overrides.items() if value is not None}
        if updates:
            config = TopologyConfig(**{**config.model_dump(), **updates})
    except ValidationError as e:
        _fail_with_error(f"Invalid configuration: {e}")
    return config


def _load(input_file: Path, config: TopologyConfig) -> Topology:
    """Read and decode the document, turning failures into a clean exit."""
    try:
        return load_topology(input_file, config)
    except TopologyError as e:
        _fail_with_error(f"Invalid topology document {input_file}: {e}")
    except (OSError, ValueError) as e:
        _fail_with_error(f"Error reading {input_file}: {e}")


@app.callback()
def main(
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."),
    ] = None,
) -> None:
    """
    hwtopo: inspect and normalize hierarchical hardware topology documents.
    """
    config = _load_config(log_level=log_level)
    configure_logging(config.log_level)


@app.command()
def show(
    input_file: InputFile,
    node: Annotated[
        int, typer.Option("--node", "-n", min=0, help="Print only the subtree of this NodeID.")
    ] = 0,
) -> None:
    """
    Print the topology as an indented outline.
    """
    topology = _load(input_file, _load_config())
    try:
        for line in stream_tree(topology, node):
            typer.echo(line, nl=False)
    except TopologyError as e:
        _fail_with_error(f"Cannot show node {node}: {e}")


@app.command()
def summary(input_file: InputFile) -> None:
    """
    Print how many processing units and caches of each kind the topology holds.
    """
    topology = _load(input_file, _load_config())
    counts = topology.summary()
    typer.echo(f"Nodes: {counts.node_count}")
    for kind, count in counts.processing.items():
        typer.echo(f"{kind.display_name}: {count}")
    for level, count in counts.caches.items():
        typer.echo(f"{level.display_name} caches: {count}")


@app.command()
def query(
    input_file: InputFile,
    node_id: Annotated[int, typer.Argument(min=0, help="NodeID to describe.")],
) -> None:
    """
    Print the parent, children, leaves and ancestors of one node as JSON.
    """
    topology = _load(input_file, _load_config())
    try:
        report = topology.describe(node_id)
    except TopologyError as e:
        _fail_with_error(f"Cannot describe node {node_id}: {e}")
    typer.echo(report.model_dump_json(indent=2))


@app.command()
def normalize(
    input_file: InputFile,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            dir_okay=False,
            writable=True,
            help="Write the document here instead of stdout.",
        ),
    ] = None,
    indent: Annotated[
        int | None, typer.Option("--indent", min=0, help="Indent the output JSON.")
    ] = None,
) -> None:
    """
    Decode a document and re-encode it in canonical form.
    """
    config = _load_config(json_indent=indent)
    topology = _load(input_file, config)
    try:
        document = encode(topology, config)
    except TopologyError as e:
        _fail_with_error(f"Failed to encode topology: {e}")

    if output is None:
        typer.echo(document.decode("utf-8"))
        return
    try:
        output.write_bytes(document + b"\n")
    except OSError as e:
        _fail_with_error(f"Error writing {output}: {e}")
    typer.echo(f"Wrote {len(topology)} nodes to {output}")


if __name__ == "__main__":
    app()
