"""Tests for directive recognition and timestamp formats."""

from datetime import datetime

from orgtask.core.parser.directives import (
    extract_directives,
    format_clock_line,
    format_org_date,
    parse_clock_line,
    parse_clock_timestamp,
    parse_org_date,
)
from orgtask.models.item import ClockEntry, Item


def test_parse_org_date_layouts() -> None:
    assert parse_org_date("2024-01-15 Mon 10:30") == datetime(2024, 1, 15, 10, 30)
    assert parse_org_date("2024-01-15 Mon") == datetime(2024, 1, 15)
    assert parse_org_date("2024-01-15") == datetime(2024, 1, 15)
    assert parse_org_date("next tuesday") is None


def test_parse_clock_timestamp_accepts_seconds() -> None:
    assert parse_clock_timestamp("2024-01-15 Mon 09:00") == datetime(2024, 1, 15, 9, 0)
    assert parse_clock_timestamp("2024-01-15 Mon 09:00:30") == datetime(2024, 1, 15, 9, 0, 30)
    assert parse_clock_timestamp("2024-01-15") is None


def test_format_org_date_adds_time_only_when_set() -> None:
    assert format_org_date(datetime(2024, 1, 15)) == "2024-01-15 Mon"
    assert format_org_date(datetime(2024, 1, 15, 8, 5)) == "2024-01-15 Mon 08:05"


def test_format_clock_line() -> None:
    start = datetime(2024, 1, 15, 9, 0)
    assert format_clock_line(ClockEntry(start=start)) == "CLOCK: [2024-01-15 Mon 09:00]"
    closed = ClockEntry(start=start, end=datetime(2024, 1, 15, 10, 0))
    assert format_clock_line(closed) == "CLOCK: [2024-01-15 Mon 09:00]--[2024-01-15 Mon 10:00]"


def test_parse_clock_line_with_bad_end_stays_open() -> None:
    entry = parse_clock_line("CLOCK: [2024-01-15 Mon 09:00]--[garbage]")
    assert entry is not None
    assert entry.end is None


def test_parse_clock_line_with_bad_start() -> None:
    assert parse_clock_line("CLOCK: [whenever]") is None


def test_extract_directives_sets_fields() -> None:
    item = Item(level=1, title="T")
    extract_directives(item, "  SCHEDULED: <2024-01-15 Mon> DEADLINE: <2024-01-20 Sat>")
    extract_directives(item, "CLOCK: [2024-01-15 Mon 09:00]--[2024-01-15 Mon 09:45] =>  0:45")

    assert item.scheduled == datetime(2024, 1, 15)
    assert item.deadline == datetime(2024, 1, 20)
    assert item.clock_entries == [
        ClockEntry(start=datetime(2024, 1, 15, 9, 0), end=datetime(2024, 1, 15, 9, 45))
    ]
    # Notes are the caller's job.
    assert item.notes == []


def test_extract_directives_ignores_unparseable_dates() -> None:
    item = Item(level=1, title="T")
    extract_directives(item, "DEADLINE: <soon>")
    assert item.deadline is None
