"""Clock in/out and time totals for items.

All functions read the wall clock at call time.

When an item's notes already hold a ``:LOGBOOK:`` drawer the serializer will
not synthesize another one, so the drawer text is kept in step here.
"""

from datetime import datetime, timedelta

from loguru import logger

from orgtask.core.parser.classifier import is_drawer_start, lines_outside_code
from orgtask.core.parser.directives import CLOCK_RE, format_clock_line, parse_clock_timestamp
from orgtask.models.item import ClockEntry, Item


def is_clocked_in(item: Item) -> bool:
    return any(entry.is_open for entry in item.clock_entries)


def _open_entry(item: Item) -> ClockEntry | None:
    for entry in item.clock_entries:
        if entry.is_open:
            return entry
    return None


def clock_in(item: Item) -> bool:
    """Start a clock entry. Returns False, changing nothing, if one is running."""
    if is_clocked_in(item):
        return False

    entry = ClockEntry(start=datetime.now())
    item.clock_entries.append(entry)

    for i, note in lines_outside_code(item.notes):
        if is_drawer_start(note):
            indent = note[: len(note) - len(note.lstrip())]
            # Newest entry first, as org does.
            item.notes.insert(i + 1, indent + format_clock_line(entry))
            break

    logger.debug("Clocked in on {!r}", item.title)
    return True


def _same_minute(a: datetime, b: datetime) -> bool:
    return a.replace(second=0, microsecond=0) == b.replace(second=0, microsecond=0)


def _close_clock_line(item: Item, entry: ClockEntry) -> None:
    """Complete the running CLOCK line in notes that belongs to ``entry``."""
    for i, note in lines_outside_code(item.notes):
        match = CLOCK_RE.search(note)
        if match is None or match.group(2):
            continue
        start = parse_clock_timestamp(match.group(1))
        if start is None or not _same_minute(start, entry.start):
            continue
        item.notes[i] = note[: match.start()] + format_clock_line(entry) + note[match.end() :]
        return


def clock_out(item: Item) -> bool:
    """Close the most recent running entry. Returns False if none is running."""
    for entry in reversed(item.clock_entries):
        if entry.is_open:
            entry.end = datetime.now()
            _close_clock_line(item, entry)
            logger.debug("Clocked out of {!r} after {}", item.title, entry.duration())
            return True
    return False


def current_open_duration(item: Item) -> timedelta:
    """Elapsed time of the running entry, zero if there is none."""
    entry = _open_entry(item)
    if entry is None:
        return timedelta(0)
    return datetime.now() - entry.start


def total_duration(item: Item) -> timedelta:
    """Sum of closed entries plus the live elapsed time of a running one."""
    now = datetime.now()
    return sum((entry.duration(now) for entry in item.clock_entries), timedelta(0))


def format_duration(delta: timedelta) -> str:
    """``"2h 5m"`` from one hour on, ``"5m"`` below."""
    total_minutes = int(delta.total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
