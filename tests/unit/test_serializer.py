"""Tests for rendering a document back to text."""

from datetime import datetime
from pathlib import Path

import pytest

from orgtask.core.parser.tree_builder import parse_text
from orgtask.core.writer.serializer import format_heading, serialize_document, serialize_item
from orgtask.models.item import ClockEntry, Document, Item, TodoState
from tests.unit.samples import SAMPLE_OUTLINE

PATH = Path("todo.org")


@pytest.mark.parametrize(
    "text",
    [
        "* A\n** B\n* C\n",
        "* TODO Buy milk\n",
        "* TODO T\nSCHEDULED: <2024-01-15 Mon>\n",
        "* T\n  DEADLINE: <2024-01-20 Sat 09:00> SCHEDULED: <2024-01-15 Mon>\n",
        "* T\n:LOGBOOK:\nCLOCK: [2024-01-15 Mon 09:00]\n:END:\n",
        "preamble\n\n* A\n\n  indented note\n",
        "* A\n#+BEGIN_SRC\n:LOGBOOK:\n#+END_SRC\n",
        SAMPLE_OUTLINE,
    ],
)
def test_round_trip_is_exact(text: str) -> None:
    assert serialize_document(parse_text(text, path=PATH)) == text


def test_no_duplicate_scheduled_line() -> None:
    text = "* TODO T\nSCHEDULED: <2024-01-15 Mon>\n"
    out = serialize_document(parse_text(text, path=PATH))
    assert out.count("SCHEDULED:") == 1


def test_heading_format() -> None:
    assert format_heading(Item(level=3, title="x")) == "*** x"
    assert format_heading(Item(level=1, title="x", state=TodoState.DONE)) == "* DONE x"


def test_fields_without_lines_are_synthesized_in_order() -> None:
    item = Item(
        level=1,
        title="T",
        state=TodoState.TODO,
        scheduled=datetime(2024, 1, 15),
        deadline=datetime(2024, 1, 20, 17, 0),
        notes=["body"],
        clock_entries=[
            ClockEntry(start=datetime(2024, 1, 15, 9, 0), end=datetime(2024, 1, 15, 10, 0)),
            ClockEntry(start=datetime(2024, 1, 16, 9, 0)),
        ],
        children=[Item(level=2, title="child")],
    )

    assert serialize_item(item) == [
        "* TODO T",
        "SCHEDULED: <2024-01-15 Mon>",
        "DEADLINE: <2024-01-20 Sat 17:00>",
        ":LOGBOOK:",
        "CLOCK: [2024-01-15 Mon 09:00]--[2024-01-15 Mon 10:00]",
        "CLOCK: [2024-01-16 Tue 09:00]",
        ":END:",
        "body",
        "** child",
    ]


def test_loose_clock_line_gets_a_drawer_once() -> None:
    text = "* T\nCLOCK: [2024-01-15 Mon 09:00]--[2024-01-15 Mon 10:00]\n"
    first = serialize_document(parse_text(text, path=PATH))

    assert first == (
        "* T\n"
        ":LOGBOOK:\n"
        "CLOCK: [2024-01-15 Mon 09:00]--[2024-01-15 Mon 10:00]\n"
        ":END:\n"
        "CLOCK: [2024-01-15 Mon 09:00]--[2024-01-15 Mon 10:00]\n"
    )
    # Stable from the second round on.
    assert serialize_document(parse_text(first, path=PATH)) == first


def test_empty_document_serializes_to_empty_string() -> None:
    assert serialize_document(Document(path=PATH)) == ""


def test_missing_trailing_newline_is_added() -> None:
    assert serialize_document(parse_text("* A", path=PATH)) == "* A\n"


def test_directive_quoted_in_code_does_not_block_synthesis() -> None:
    text = (
        "* T\n"
        "SCHEDULED: <2024-01-15 Mon>\n"
        "#+BEGIN_SRC org\n"
        "SCHEDULED: <2023-01-01>\n"
        "#+END_SRC\n"
    )
    doc = parse_text(text, path=PATH)
    item = doc.items[0]
    del item.notes[0]

    out = serialize_document(doc)

    assert out.startswith("* T\nSCHEDULED: <2024-01-15 Mon>\n#+BEGIN_SRC org\n")
    assert parse_text(out, path=PATH).items[0].scheduled == datetime(2024, 1, 15)
