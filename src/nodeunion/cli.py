"""nodeunion command line entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from .config import StoreConfig
from .errors import NodeUnionError
from .io import read_connections, read_names
from .union_find import UnionFindClient

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="nodeunion",
    help="Count the connected groups among named nodes.",
    no_args_is_help=True,
    add_completion=False,
)


@app.command()
def run(
    nodes: Annotated[
        Path,
        typer.Option("--nodes", "-n", help="File with one node name per line.", exists=True, dir_okay=False),
    ],
    connections: Annotated[
        Path,
        typer.Option("--connections", "-c", help="File of a,b node index pairs.", exists=True, dir_okay=False),
    ],
    path_compression: Annotated[
        bool, typer.Option("--path-compression", help="Halve paths during root lookups.")
    ] = False,
    reject_duplicates: Annotated[
        bool, typer.Option("--reject-duplicates", help="Fail if a node name appears twice.")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress.")] = False,
) -> None:
    """Load nodes and connections, then print the number of disjoint sets."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    typer.echo(f"Node File: {nodes}")
    typer.echo(f"Connections File: {connections}")

    config = StoreConfig(
        batch_duplicates="reject" if reject_duplicates else "allow",
        path_compression=path_compression,
    )
    client = UnionFindClient(config)
    try:
        client.insert_batch(read_names(nodes))
        client.connect_bulk(read_connections(connections))
    except NodeUnionError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Nodes: {client.count()}")
    typer.echo(f"Disjoint sets: {client.disjoint_set_count()}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
