"""CLI for orgtask: list, capture and edit items of an org outline."""

from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from orgtask.config import resolve_outline_path
from orgtask.core.tree.clocking import clock_in, clock_out
from orgtask.core.tree.navigation import agenda_items, flatten_visible
from orgtask.core.tree.operations import (
    MoveResult,
    add_sub_task,
    advance_state,
    capture,
    delete_item,
    move_item,
    parse_deadline_input,
    set_deadline,
    set_notes,
    set_scheduled,
)
from orgtask.core.tree.render import render_item_details, summarize_item
from orgtask.logging_config import configure_logging
from orgtask.models.item import Document, Item
from orgtask.protocols import OutlineStoreProtocol
from orgtask.storage import FileStore

app = typer.Typer(help="orgtask: manage TODO items in a plain-text org outline.")

Position = Annotated[int, typer.Argument(help="Item number as shown by 'list'")]

_MOVE_MESSAGES = {
    MoveResult.AT_BOUNDARY: "Item is already at the edge of the list.",
    MoveResult.LEVEL_MISMATCH: "Cannot move across different levels.",
    MoveResult.NOT_ADJACENT: "Neighbouring item is not in the same list.",
    MoveResult.NOT_VISIBLE: "Item is not visible.",
}


@app.callback()
def main(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Org file (default: $ORGTASK_FILE or ./todo.org)"),
    ] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)
    if ctx.obj is None:
        ctx.obj = FileStore(resolve_outline_path(file))


def _store(ctx: typer.Context) -> OutlineStoreProtocol:
    store: OutlineStoreProtocol = ctx.obj
    return store


def _load(ctx: typer.Context) -> Document:
    try:
        return _store(ctx).load()
    except OSError as e:
        logger.error("Cannot read outline: {}", e)
        raise typer.Exit(1) from e


def _save(ctx: typer.Context, document: Document) -> None:
    try:
        _store(ctx).save(document)
    except OSError as e:
        logger.error("Cannot save outline: {}", e)
        raise typer.Exit(1) from e


def _item_at(document: Document, position: int) -> Item:
    """Resolve a 1-based position in the visible list."""
    visible = flatten_visible(document)
    if position < 1 or position > len(visible):
        typer.echo(f"No item number {position} (there are {len(visible)}).")
        raise typer.Exit(1)
    return visible[position - 1]


@app.command(name="list")
def list_cmd(ctx: typer.Context) -> None:
    """List visible items with their numbers."""
    document = _load(ctx)
    visible = flatten_visible(document)
    if not visible:
        typer.echo("No items.")
        return
    width = len(str(len(visible)))
    for number, item in enumerate(visible, start=1):
        typer.echo(f"{number:>{width}}. {summarize_item(item)}")


@app.command()
def agenda(ctx: typer.Context) -> None:
    """Show items scheduled or due within the next week."""
    document = _load(ctx)
    items = agenda_items(document)
    if not items:
        typer.echo("Nothing on the agenda.")
        return
    for item in items:
        typer.echo(summarize_item(item))


@app.command()
def show(ctx: typer.Context, position: Position) -> None:
    """Show one item with its notes."""
    document = _load(ctx)
    typer.echo(render_item_details(_item_at(document, position)), nl=False)


@app.command(name="capture")
def capture_cmd(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="What needs doing?"),
) -> None:
    """Add a new top-level TODO at the start of the outline."""
    document = _load(ctx)
    try:
        capture(document, title)
    except ValueError as e:
        typer.echo(str(e))
        raise typer.Exit(1) from e
    _save(ctx, document)
    typer.echo("TODO captured!")


@app.command()
def add(
    ctx: typer.Context,
    position: Position,
    title: str = typer.Argument(..., help="Sub-task title"),
) -> None:
    """Add a TODO sub-task under an item."""
    document = _load(ctx)
    parent = _item_at(document, position)
    try:
        add_sub_task(parent, title)
    except ValueError as e:
        typer.echo(str(e))
        raise typer.Exit(1) from e
    _save(ctx, document)
    typer.echo(f"Sub-task added under {parent.title!r}.")


@app.command()
def state(
    ctx: typer.Context,
    position: Position,
    back: bool = typer.Option(False, "--back", "-b", help="Cycle backwards"),
) -> None:
    """Cycle the TODO state of an item."""
    document = _load(ctx)
    item = _item_at(document, position)
    clocked_out = advance_state(item, backward=back)
    _save(ctx, document)
    typer.echo(f"State changed to {item.state.value or '(none)'}.")
    if clocked_out:
        typer.echo("Clocked out.")


@app.command(name="clock-in")
def clock_in_cmd(ctx: typer.Context, position: Position) -> None:
    """Start the clock on an item."""
    document = _load(ctx)
    if not clock_in(_item_at(document, position)):
        typer.echo("Already clocked in.")
        raise typer.Exit(1)
    _save(ctx, document)
    typer.echo("Clocked in!")


@app.command(name="clock-out")
def clock_out_cmd(ctx: typer.Context, position: Position) -> None:
    """Stop the running clock on an item."""
    document = _load(ctx)
    if not clock_out(_item_at(document, position)):
        typer.echo("Not clocked in.")
        raise typer.Exit(1)
    _save(ctx, document)
    typer.echo("Clocked out!")


def _parse_date_argument(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return parse_deadline_input(value)
    except ValueError as e:
        typer.echo(f"Invalid date: {e}")
        raise typer.Exit(1) from e


@app.command()
def deadline(
    ctx: typer.Context,
    position: Position,
    date: Annotated[
        str | None,
        typer.Argument(help="YYYY-MM-DD or +N (days from today); omit to clear"),
    ] = None,
) -> None:
    """Set or clear an item's deadline."""
    document = _load(ctx)
    item = _item_at(document, position)
    when = _parse_date_argument(date)
    set_deadline(item, when)
    _save(ctx, document)
    typer.echo("Deadline set!" if when else "Deadline cleared!")


@app.command()
def schedule(
    ctx: typer.Context,
    position: Position,
    date: Annotated[
        str | None,
        typer.Argument(help="YYYY-MM-DD or +N (days from today); omit to clear"),
    ] = None,
) -> None:
    """Set or clear an item's scheduled date."""
    document = _load(ctx)
    item = _item_at(document, position)
    when = _parse_date_argument(date)
    set_scheduled(item, when)
    _save(ctx, document)
    typer.echo("Scheduled!" if when else "Schedule cleared!")


@app.command()
def notes(
    ctx: typer.Context,
    position: Position,
    text: Annotated[
        str | None,
        typer.Argument(help="New notes, one note per line; omit to open $EDITOR"),
    ] = None,
) -> None:
    """Replace an item's notes. Empty text clears them."""
    document = _load(ctx)
    item = _item_at(document, position)
    if text is None:
        current = "\n".join(item.notes) + "\n" if item.notes else ""
        edited = typer.edit(current)
        if edited is None:
            typer.echo("Notes unchanged.")
            return
        text = edited.removesuffix("\n")
    try:
        set_notes(item, text)
    except ValueError as e:
        typer.echo(str(e))
        raise typer.Exit(1) from e
    _save(ctx, document)
    typer.echo("Notes saved.")


@app.command()
def move(
    ctx: typer.Context,
    position: Position,
    up: bool = typer.Option(True, "--up/--down", help="Direction to move"),
) -> None:
    """Swap an item with its visible neighbour at the same level."""
    document = _load(ctx)
    result = move_item(document, _item_at(document, position), up=up)
    if result is not MoveResult.MOVED:
        typer.echo(_MOVE_MESSAGES[result])
        raise typer.Exit(1)
    _save(ctx, document)
    typer.echo("Item moved up." if up else "Item moved down.")


@app.command()
def delete(
    ctx: typer.Context,
    position: Position,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete an item together with its sub-items."""
    document = _load(ctx)
    item = _item_at(document, position)
    if not yes and not typer.confirm(f"Delete {item.title!r} and its sub-items?"):
        typer.echo("Cancelled.")
        return
    delete_item(document, item)
    _save(ctx, document)
    typer.echo("Deleted.")
