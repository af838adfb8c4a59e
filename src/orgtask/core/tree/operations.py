"""Mutations on a Document: states, folding, insert, delete, reorder, dates, notes.

Refusals that callers are expected to handle (moving across levels, deleting
an item that is gone) are reported through return values and leave the tree
untouched. Only malformed input values raise ``ValueError``.
"""

import re
from datetime import datetime, timedelta
from enum import Enum

from loguru import logger

from orgtask.config import DEADLINE_MARKER, SCHEDULED_MARKER
from orgtask.core.parser.classifier import LineClassifier, LineKind, lines_outside_code
from orgtask.core.parser.directives import (
    DEADLINE_RE,
    SCHEDULED_RE,
    extract_directives,
    format_deadline_line,
    format_scheduled_line,
)
from orgtask.core.parser.tree_builder import parse_heading
from orgtask.core.tree.clocking import clock_out, is_clocked_in
from orgtask.core.tree.navigation import find_container, flatten_visible
from orgtask.models.item import Document, Item, TodoState


class MoveResult(Enum):
    """Outcome of move_item."""

    MOVED = "moved"
    AT_BOUNDARY = "at_boundary"
    LEVEL_MISMATCH = "level_mismatch"
    NOT_ADJACENT = "not_adjacent"
    NOT_VISIBLE = "not_visible"


# --- States and folding ---


def cycle_state_forward(item: Item) -> None:
    item.state = item.state.next()


def cycle_state_backward(item: Item) -> None:
    item.state = item.state.previous()


def advance_state(item: Item, *, backward: bool = False) -> bool:
    """Cycle the state; a running clock is stopped when the item becomes DONE.

    Returns True if the item was clocked out.
    """
    if backward:
        cycle_state_backward(item)
    else:
        cycle_state_forward(item)
    if item.state is TodoState.DONE and is_clocked_in(item):
        return clock_out(item)
    return False


def toggle_fold(item: Item) -> bool:
    """Flip the fold flag and return the new value."""
    item.folded = not item.folded
    return item.folded


# --- Insert and delete ---


def _clean_title(title: str) -> str:
    cleaned = title.strip()
    if not cleaned:
        msg = "Title must not be empty"
        raise ValueError(msg)
    return cleaned


def capture(document: Document, title: str) -> Item:
    """Create a top-level TODO and put it first in the document."""
    item = Item(level=1, state=TodoState.TODO, title=_clean_title(title))
    document.items.insert(0, item)
    logger.debug("Captured {!r}", item.title)
    return item


def add_sub_task(parent: Item, title: str) -> Item:
    """Append a TODO child to ``parent`` and unfold it so the child shows."""
    item = Item(level=parent.level + 1, state=TodoState.TODO, title=_clean_title(title))
    parent.children.append(item)
    parent.folded = False
    return item


def delete_item(document: Document, target: Item) -> bool:
    """Remove ``target`` and its whole subtree.

    Returns False, changing nothing, when ``target`` is not in the tree.
    """
    container = find_container(document, target)
    if container is None:
        return False
    # Items compare by identity, so this removes exactly ``target``.
    container.remove(target)
    logger.debug("Deleted {!r}", target.title)
    return True


# --- Reordering ---


def swap_adjacent(document: Document, a: Item, b: Item) -> bool:
    """Swap two items that sit next to each other in the same list.

    Both must have the same level. Returns False, changing nothing, otherwise.
    """
    if a is b or a.level != b.level:
        return False
    container = find_container(document, a)
    if container is None:
        return False
    i = container.index(a)
    for j in (i - 1, i + 1):
        if 0 <= j < len(container) and container[j] is b:
            container[i], container[j] = b, a
            return True
    return False


def move_item(document: Document, item: Item, *, up: bool) -> MoveResult:
    """Swap ``item`` with its neighbour in the visible order."""
    visible = flatten_visible(document)
    position = next((i for i, candidate in enumerate(visible) if candidate is item), None)
    if position is None:
        return MoveResult.NOT_VISIBLE

    neighbour_position = position - 1 if up else position + 1
    if neighbour_position < 0 or neighbour_position >= len(visible):
        return MoveResult.AT_BOUNDARY

    neighbour = visible[neighbour_position]
    if neighbour.level != item.level:
        return MoveResult.LEVEL_MISMATCH
    if not swap_adjacent(document, item, neighbour):
        return MoveResult.NOT_ADJACENT
    return MoveResult.MOVED


# --- Scheduled and deadline ---


def _without_match(note: str, match: re.Match[str]) -> str | None:
    """Cut a directive out of ``note``; None when nothing else is left."""
    head = note[: match.start()]
    tail = note[match.end() :]
    if head.strip():
        rest = (head.rstrip() + " " + tail.lstrip()).rstrip()
    else:
        rest = head + tail.lstrip()
    return rest if rest.strip() else None


def _set_directive(
    item: Item,
    when: datetime | None,
    *,
    pattern: re.Pattern[str],
    marker: str,
    line: str,
) -> None:
    """Keep the directive text in notes in step with the derived field.

    The first directive outside code blocks is rewritten in place and every
    later one is removed, since on load the last one would win. Clearing
    removes them all. A line that starts with the marker but carries an
    unreadable timestamp counts as a directive.
    """
    outside_code = {i for i, _ in lines_outside_code(item.notes)}
    placed = False
    notes: list[str] = []
    for i, note in enumerate(item.notes):
        if i not in outside_code or marker not in note:
            notes.append(note)
            continue
        match = pattern.search(note)
        if match is None and not note.lstrip().startswith(marker):
            # Marker mentioned in prose.
            notes.append(note)
            continue
        if when is not None and not placed:
            placed = True
            if match is not None:
                notes.append(note[: match.start()] + line + note[match.end() :])
            else:
                notes.append(note[: len(note) - len(note.lstrip())] + line)
            continue
        if match is None:
            continue
        rest = _without_match(note, match)
        if rest is not None:
            notes.append(rest)
    item.notes = notes

    if when is not None and not placed and _notes_mention(notes, marker):
        # The marker only shows up inside prose, which would stop the
        # serializer from writing the directive.
        item.notes.insert(0, line)


def _notes_mention(notes: list[str], marker: str) -> bool:
    return any(marker in note for _, note in lines_outside_code(notes))


def set_deadline(item: Item, when: datetime | None) -> None:
    """Set or clear the deadline, keeping any DEADLINE line in notes in step."""
    item.deadline = when
    _set_directive(
        item,
        when,
        pattern=DEADLINE_RE,
        marker=DEADLINE_MARKER,
        line=format_deadline_line(when) if when else "",
    )


def set_scheduled(item: Item, when: datetime | None) -> None:
    """Set or clear the scheduled date, keeping any SCHEDULED line in notes in step."""
    item.scheduled = when
    _set_directive(
        item,
        when,
        pattern=SCHEDULED_RE,
        marker=SCHEDULED_MARKER,
        line=format_scheduled_line(when) if when else "",
    )


_INPUT_DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y")


def parse_deadline_input(text: str, *, today: datetime | None = None) -> datetime:
    """Parse user input such as ``2024-01-15``, ``2024/01/15``, ``01/15/2024`` or ``+3``.

    ``+N`` means N days from today.

    Raises:
        ValueError: If the input matches none of the accepted forms.
    """
    value = text.strip()
    if value.startswith("+"):
        try:
            days = int(value[1:])
        except ValueError:
            msg = f"invalid relative date format: {text}"
            raise ValueError(msg) from None
        base = today or datetime.now()
        return base.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=days)

    for fmt in _INPUT_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    msg = f"unable to parse date: {text} (use YYYY-MM-DD or +N)"
    raise ValueError(msg)


# --- Notes ---


def set_notes(item: Item, text: str) -> None:
    """Replace the notes of ``item`` with ``text``, one note per line.

    Empty text clears the notes. The scheduled date, deadline and clock
    entries are read again from the new lines, so they match what the next
    load of the saved file gives.

    Raises:
        ValueError: If a line outside drawers and code blocks is a heading;
            saving it would split the item.
    """
    notes = text.split("\n") if text else []
    classifier = LineClassifier()
    kinds = [classifier.classify(note) for note in notes]
    for note, kind in zip(notes, kinds, strict=True):
        if kind is LineKind.CANDIDATE and parse_heading(note) is not None:
            msg = f"Notes must not contain heading lines: {note!r}"
            raise ValueError(msg)

    item.notes = notes
    item.scheduled = None
    item.deadline = None
    item.clock_entries = []
    for note, kind in zip(notes, kinds, strict=True):
        if kind is LineKind.CANDIDATE or kind is LineKind.CONTENT:
            extract_directives(item, note)
    logger.debug("Replaced notes of {!r} ({} lines)", item.title, len(notes))
