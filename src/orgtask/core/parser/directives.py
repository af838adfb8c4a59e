"""Recognize SCHEDULED, DEADLINE and CLOCK directives in content lines."""

import re
from datetime import datetime

from orgtask.models.item import ClockEntry, Item

SCHEDULED_RE = re.compile(r"SCHEDULED:\s*<([^>]+)>")
DEADLINE_RE = re.compile(r"DEADLINE:\s*<([^>]+)>")
CLOCK_RE = re.compile(r"CLOCK:\s*\[([^\]]+)\](?:--\[([^\]]+)\])?")

# Tried in order, first match wins.
DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d %a %H:%M", "%Y-%m-%d %a", "%Y-%m-%d")
CLOCK_FORMATS: tuple[str, ...] = ("%Y-%m-%d %a %H:%M", "%Y-%m-%d %a %H:%M:%S")


def _parse_with(formats: tuple[str, ...], value: str) -> datetime | None:
    value = value.strip()
    for fmt in formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def parse_org_date(value: str) -> datetime | None:
    """Parse the inside of ``<...>``, e.g. ``2024-01-15 Mon 10:00``.

    Returns None when no layout matches.
    """
    return _parse_with(DATE_FORMATS, value)


def parse_clock_timestamp(value: str) -> datetime | None:
    """Parse the inside of ``[...]`` in a CLOCK line."""
    return _parse_with(CLOCK_FORMATS, value)


def format_org_date(when: datetime) -> str:
    if when.hour or when.minute:
        return when.strftime("%Y-%m-%d %a %H:%M")
    return when.strftime("%Y-%m-%d %a")


def format_clock_timestamp(when: datetime) -> str:
    return when.strftime("%Y-%m-%d %a %H:%M")


def format_scheduled_line(when: datetime) -> str:
    return f"SCHEDULED: <{format_org_date(when)}>"


def format_deadline_line(when: datetime) -> str:
    return f"DEADLINE: <{format_org_date(when)}>"


def format_clock_line(entry: ClockEntry) -> str:
    line = f"CLOCK: [{format_clock_timestamp(entry.start)}]"
    if entry.end is not None:
        line += f"--[{format_clock_timestamp(entry.end)}]"
    return line


def parse_clock_line(line: str) -> ClockEntry | None:
    """Return the clock entry carried by ``line``, or None.

    An end timestamp that fails to parse leaves the entry running.
    """
    match = CLOCK_RE.search(line)
    if match is None:
        return None
    start = parse_clock_timestamp(match.group(1))
    if start is None:
        return None
    end = parse_clock_timestamp(match.group(2)) if match.group(2) else None
    return ClockEntry(start=start, end=end)


def extract_directives(item: Item, line: str) -> None:
    """Update the derived fields of ``item`` from ``line``.

    The caller keeps the line in notes regardless of what matched here.
    """
    match = SCHEDULED_RE.search(line)
    if match:
        scheduled = parse_org_date(match.group(1))
        if scheduled is not None:
            item.scheduled = scheduled

    match = DEADLINE_RE.search(line)
    if match:
        deadline = parse_org_date(match.group(1))
        if deadline is not None:
            item.deadline = deadline

    entry = parse_clock_line(line)
    if entry is not None:
        item.clock_entries.append(entry)
