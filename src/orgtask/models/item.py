"""Domain models for org outlines."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path


class TodoState(Enum):
    """Lifecycle state of a heading, in cycle order."""

    NONE = ""
    TODO = "TODO"
    PROG = "PROG"
    BLOCK = "BLOCK"
    DONE = "DONE"

    @classmethod
    def from_token(cls, token: str | None) -> "TodoState":
        """Map a heading keyword (or None) to a state."""
        return cls(token or "")

    def next(self) -> "TodoState":
        members = list(TodoState)
        return members[(members.index(self) + 1) % len(members)]

    def previous(self) -> "TodoState":
        members = list(TodoState)
        return members[(members.index(self) - 1) % len(members)]


@dataclass
class ClockEntry:
    """One interval of work on an item. An entry without end is running."""

    start: datetime
    end: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    def duration(self, now: datetime | None = None) -> timedelta:
        if self.end is not None:
            return self.end - self.start
        return (now or datetime.now()) - self.start


@dataclass(eq=False)
class Item:
    """A single heading and everything it owns.

    Items compare by identity: two headings with the same title and fields are
    still different items.
    """

    level: int
    title: str
    state: TodoState = TodoState.NONE
    scheduled: datetime | None = None
    deadline: datetime | None = None
    notes: list[str] = field(default_factory=list)
    children: list["Item"] = field(default_factory=list)
    folded: bool = False
    clock_entries: list[ClockEntry] = field(default_factory=list)


@dataclass(eq=False)
class Document:
    """A parsed outline file.

    ``preamble`` holds the lines found before the first heading.
    """

    path: Path
    items: list[Item] = field(default_factory=list)
    preamble: list[str] = field(default_factory=list)
