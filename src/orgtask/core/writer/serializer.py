"""Render a Document back to org outline text."""

import io

from orgtask.config import DEADLINE_MARKER, DRAWER_END, DRAWER_START, SCHEDULED_MARKER
from orgtask.core.parser.classifier import lines_outside_code
from orgtask.core.parser.directives import (
    format_clock_line,
    format_deadline_line,
    format_scheduled_line,
)
from orgtask.models.item import Document, Item, TodoState


def format_heading(item: Item) -> str:
    line = "*" * item.level
    if item.state is not TodoState.NONE:
        line += " " + item.state.value
    return line + " " + item.title


def _notes_contain(item: Item, marker: str) -> bool:
    return any(marker in note for _, note in lines_outside_code(item.notes))


def serialize_item(item: Item) -> list[str]:
    """Return the lines for ``item`` and its subtree, without terminators.

    Directive lines are synthesized from the derived fields only when the
    notes do not already carry them; notes are then written verbatim.
    """
    lines = [format_heading(item)]

    if item.scheduled is not None and not _notes_contain(item, SCHEDULED_MARKER):
        lines.append(format_scheduled_line(item.scheduled))

    if item.deadline is not None and not _notes_contain(item, DEADLINE_MARKER):
        lines.append(format_deadline_line(item.deadline))

    if item.clock_entries and not _notes_contain(item, DRAWER_START):
        lines.append(DRAWER_START)
        lines.extend(format_clock_line(entry) for entry in item.clock_entries)
        lines.append(DRAWER_END)

    lines.extend(item.notes)

    for child in item.children:
        lines.extend(serialize_item(child))
    return lines


def serialize_document(document: Document) -> str:
    """Render the whole document. Every line, including the last, ends in a newline."""
    out = io.StringIO()
    for line in document.preamble:
        out.write(line + "\n")
    for item in document.items:
        for line in serialize_item(item):
            out.write(line + "\n")
    return out.getvalue()
