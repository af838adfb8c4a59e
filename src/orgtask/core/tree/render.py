"""Plain-text summaries of items for listings."""

import io
from datetime import datetime

from orgtask.config import DEADLINE_MARKER, SCHEDULED_MARKER
from orgtask.core.parser.classifier import LineClassifier, LineKind
from orgtask.core.parser.directives import format_org_date
from orgtask.core.tree.clocking import (
    current_open_duration,
    format_duration,
    is_clocked_in,
    total_duration,
)
from orgtask.models.item import Item, TodoState

# Width of the widest state keyword, so titles line up.
_STATE_WIDTH = max(len(state.value) for state in TodoState)


def display_notes(notes: list[str]) -> list[str]:
    """Drop the logbook drawer and the SCHEDULED/DEADLINE lines from notes.

    Code blocks are shown as written.
    """
    shown: list[str] = []
    classifier = LineClassifier()
    for note in notes:
        kind = classifier.classify(note)
        if kind is LineKind.DRAWER_BOUNDARY or kind is LineKind.CONTENT:
            continue
        if kind is LineKind.CANDIDATE:
            trimmed = note.strip()
            if trimmed.startswith(SCHEDULED_MARKER) or trimmed.startswith(DEADLINE_MARKER):
                continue
        shown.append(note)
    return shown


def summarize_item(item: Item, *, now: datetime | None = None) -> str:
    """Render one listing line: indentation, state, title, clock and dates."""
    now = now or datetime.now()
    out = io.StringIO()
    out.write("  " * (item.level - 1))
    out.write("+ " if item.folded and item.children else "- ")
    out.write(item.state.value.ljust(_STATE_WIDTH))
    out.write(" ")
    out.write(item.title)

    if is_clocked_in(item):
        out.write(f" [CLOCKED IN: {format_duration(current_open_duration(item))}]")
    if item.clock_entries:
        out.write(f" (Time: {format_duration(total_duration(item))})")

    if item.scheduled is not None:
        out.write(f" (Scheduled: {format_org_date(item.scheduled)})")
    if item.deadline is not None:
        overdue = " OVERDUE" if item.deadline < now and item.state is not TodoState.DONE else ""
        out.write(f" (Deadline: {format_org_date(item.deadline)}{overdue})")
    return out.getvalue()


def render_item_details(item: Item, *, now: datetime | None = None) -> str:
    """Summary line followed by the displayable notes, indented."""
    out = io.StringIO()
    out.write(summarize_item(item, now=now) + "\n")
    indent = "  " * item.level
    for note in display_notes(item.notes):
        out.write(f"{indent}{note}\n")
    return out.getvalue()
