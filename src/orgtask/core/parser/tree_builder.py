"""Parse org outline text into a Document tree."""

import re
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from orgtask.core.parser.classifier import LineClassifier, LineKind, ScanMode
from orgtask.core.parser.directives import extract_directives
from orgtask.models.item import Document, Item, TodoState

HEADING_RE = re.compile(r"^(\*+)\s+(?:(TODO|PROG|BLOCK|DONE)\s+)?(.+)$")


def parse_heading(line: str) -> Item | None:
    """Build a fresh Item from a heading line, or return None if it is not one."""
    match = HEADING_RE.match(line)
    if match is None:
        return None
    stars, token, title = match.groups()
    return Item(level=len(stars), state=TodoState.from_token(token), title=title)


def parse_lines(lines: Iterable[str], *, path: Path) -> Document:
    """Parse outline lines (without line terminators) into a Document.

    Args:
        lines: Raw lines, in file order.
        path: Where the document lives; kept for saving.

    Returns:
        Document whose items nest by heading level. Every non-heading line is
        kept verbatim in the notes of the heading above it, or in the
        preamble when no heading has been seen yet.
    """
    document = Document(path=path)
    classifier = LineClassifier()
    # Open ancestors, outermost first.
    stack: list[Item] = []
    current: Item | None = None

    def keep(line: str) -> None:
        if current is None:
            document.preamble.append(line)
        else:
            current.notes.append(line)

    for line in lines:
        kind = classifier.classify(line)

        if kind is not LineKind.CANDIDATE:
            if kind is LineKind.CONTENT and current is not None:
                extract_directives(current, line)
            keep(line)
            continue

        item = parse_heading(line)
        if item is None:
            if current is not None:
                extract_directives(current, line)
            keep(line)
            continue

        while stack and stack[-1].level >= item.level:
            stack.pop()
        if stack:
            stack[-1].children.append(item)
        else:
            document.items.append(item)
        stack.append(item)
        current = item

    if classifier.mode is not ScanMode.NORMAL:
        logger.debug("Input ended inside a region ({}), kept verbatim", classifier.mode.value)
    logger.debug("Parsed {} top-level items from {}", len(document.items), path)
    return document


def parse_text(text: str, *, path: Path) -> Document:
    """Parse a whole outline held in memory."""
    # str.splitlines() would also break on form feeds and other separators.
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return parse_lines(lines, path=path)
