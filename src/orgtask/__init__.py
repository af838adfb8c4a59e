"""Plain-text org outline task manager."""

from orgtask.models.item import ClockEntry, Document, Item, TodoState
from orgtask.protocols import OutlineStoreProtocol
from orgtask.storage import FileStore, load, save

__all__ = [
    "ClockEntry",
    "Document",
    "FileStore",
    "Item",
    "OutlineStoreProtocol",
    "TodoState",
    "load",
    "save",
]
