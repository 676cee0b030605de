"""Command-line interface: run the editing flow against local files."""

from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

# Load environment variables from .env file
load_dotenv()

console = Console()


def _parse_container(value: str) -> tuple[float, float]:
    try:
        width, height = (float(v) for v in value.lower().split("x"))
    except ValueError:
        raise click.BadParameter("expected WIDTHxHEIGHT, e.g. 800x600")
    if width <= 0 or height <= 0:
        raise click.BadParameter("container dimensions must be positive")
    return width, height


def _history_store():
    from vanish.config import settings
    from vanish.history.kv import JsonFileKeyValueStore
    from vanish.history.store import HistoryStore

    return HistoryStore(JsonFileKeyValueStore(settings.storage_file))


@click.group()
def main() -> None:
    """Remove watermarks and logos with a hosted image model."""


@main.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--preset", "-p",
    type=click.Choice(["tl", "tr", "bl", "br"]),
    default=None,
    help="Select a 100x100 box in a corner of the container",
)
@click.option(
    "--rect", "-r",
    type=float,
    nargs=4,
    default=None,
    metavar="X Y W H",
    help="Select an explicit rectangle in container pixels",
)
@click.option(
    "--container", "-c",
    required=True,
    help="Displayed size the selection refers to, as WIDTHxHEIGHT",
)
@click.option(
    "--output", "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Directory for the downloaded result. Defaults to the current directory",
)
def remove(
    image: Path,
    preset: str | None,
    rect: tuple[float, float, float, float] | None,
    container: str,
    output: Path,
) -> None:
    """Remove the watermark inside a selection of IMAGE."""
    from vanish.dependencies import get_inpainter
    from vanish.engine.session import (
        ContainerResized,
        PointerDown,
        PointerMove,
        PointerUp,
        PresetChosen,
        TransitionError,
    )
    from vanish.engine.state import Point, ProcessingStatus, Size
    from vanish.engine.workflow import EditingSession
    from vanish.utils.files import DirectorySaver, PathSource

    if (preset is None) == (rect is None):
        raise click.UsageError("Give exactly one of --preset or --rect")
    width, height = _parse_container(container)

    session = EditingSession(_history_store())
    asyncio.run(session.upload(PathSource(image)))
    session.dispatch(ContainerResized(size=Size(width=width, height=height)))

    if preset is not None:
        session.dispatch(PresetChosen(corner=preset))
    else:
        x, y, w, h = rect
        session.dispatch(PointerDown(point=Point(x=x, y=y)))
        session.dispatch(PointerMove(point=Point(x=x + w, y=y + h)))
        session.dispatch(PointerUp())

    sel = session.state.selection
    console.print("[bold blue]Vanish[/bold blue]")
    console.print(f"Input: {image}")
    console.print(f"Selection: x={sel.x:g} y={sel.y:g} w={sel.width:g} h={sel.height:g}")

    try:
        with console.status("Healing the image..."):
            state = asyncio.run(session.process(get_inpainter()))
    except TransitionError as e:
        raise click.ClickException(str(e))

    if state.status == ProcessingStatus.ERROR:
        raise click.ClickException(state.error or "Processing failed")

    saved = session.download(DirectorySaver(output))
    console.print(f"[green]Saved[/green] {saved}")


@main.command()
def history() -> None:
    """List recent removals, most recent first."""
    entries = _history_store().entries()
    if not entries:
        console.print("No history yet.")
        return

    table = Table(title="Recent edits")
    table.add_column("ID")
    table.add_column("When")
    table.add_column("Original", justify="right")
    table.add_column("Processed", justify="right")
    for entry in entries:
        when = datetime.fromtimestamp(entry.timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S")
        table.add_row(entry.id, when, f"{len(entry.original_image)} chars", f"{len(entry.processed_image)} chars")
    console.print(table)


@main.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("vanish.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
