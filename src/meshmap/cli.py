"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print

from .config import DEFAULT_ZOOM, TILE_SIZE
from .errors import MeshMapError, NodeDataError
from .map_view.centroid import choose_center
from .map_view.coordinates import node_coordinate
from .map_view.projection import coordinate_to_viewport, is_marker_visible, project_to_screen
from .map_view.viewport import ViewportState, clamp_zoom
from .models import NodeRecord
from .utils.jsonio import read_json
from .utils.logging import ensure_console_logger

app = typer.Typer(help="Inspect how mesh node positions land on the map viewport")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except NodeDataError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except MeshMapError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def load_nodes(path: Path) -> list[NodeRecord]:
    """Read a JSON array of node objects from *path*."""

    try:
        payload = read_json(path)
    except (OSError, ValueError) as exc:
        raise NodeDataError(f"cannot read node file {path}: {exc}") from exc
    if not isinstance(payload, list):
        raise NodeDataError(f"{path}: expected a JSON array of nodes")

    nodes: list[NodeRecord] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise NodeDataError(f"{path}: entry {index} is not an object")
        try:
            nodes.append(NodeRecord.from_mapping(entry))
        except ValueError as exc:
            raise NodeDataError(f"{path}: entry {index}: {exc}") from exc
    return nodes


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log centring decisions")) -> None:
    """Configure logging for every sub-command."""

    ensure_console_logger(
        logging.getLogger("meshmap"),
        "meshmap-cli",
        level=logging.DEBUG if verbose else logging.WARNING,
    )


@app.command()
@_handle_errors
def center(
    nodes_file: Path = typer.Argument(..., exists=True, dir_okay=False),
    local_node: Optional[str] = typer.Option(None, "--local-node", help="ID of the local device's node"),
    zoom: int = typer.Option(DEFAULT_ZOOM, "--zoom", help="Zoom level of the resulting viewport"),
) -> None:
    """Print the map centre chosen for NODES_FILE and its viewport."""

    nodes = load_nodes(nodes_file)
    coord = choose_center(nodes, local_node)
    if coord is None:
        typer.echo("No node positions", err=True)
        raise typer.Exit(1)

    viewport = coordinate_to_viewport(coord, zoom)
    print(f"[bold]Center[/bold]: {coord.latitude:.6f}, {coord.longitude:.6f}")
    print(f"[bold]Viewport[/bold]: zoom={viewport.zoom} x={viewport.tile_x} y={viewport.tile_y}")


@app.command()
@_handle_errors
def project(
    nodes_file: Path = typer.Argument(..., exists=True, dir_okay=False),
    zoom: int = typer.Option(..., "--zoom"),
    x: int = typer.Option(..., "--x", help="Viewport tile offset along X"),
    y: int = typer.Option(..., "--y", help="Viewport tile offset along Y"),
    width: int = typer.Option(TILE_SIZE * 4, "--width"),
    height: int = typer.Option(TILE_SIZE * 3, "--height"),
) -> None:
    """Print the canvas position of every positioned node in NODES_FILE."""

    nodes = load_nodes(nodes_file)
    viewport = ViewportState(zoom=clamp_zoom(zoom), tile_x=x, tile_y=y)
    for node in nodes:
        coord = node_coordinate(node)
        if coord is None:
            print(f"{node.node_id}: [dim]no position[/dim]")
            continue
        position = project_to_screen(coord, viewport, width, height)
        if position is None:
            print(f"{node.node_id}: [dim]empty canvas[/dim]")
            continue
        px, py = position
        suffix = "" if is_marker_visible(px, py, width, height) else " [dim](off-screen)[/dim]"
        print(f"{node.node_id}: {px:.1f}, {py:.1f}{suffix}")


if __name__ == "__main__":
    app()
