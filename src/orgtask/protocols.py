"""Protocols for dependency injection in the CLI."""

from typing import Protocol, runtime_checkable

from orgtask.models.item import Document


@runtime_checkable
class OutlineStoreProtocol(Protocol):
    """Somewhere a Document is loaded from and saved back to."""

    def load(self) -> Document:
        """Return the current document; an absent outline yields an empty one."""
        ...

    def save(self, document: Document) -> None:
        """Persist the whole document, replacing what was stored."""
        ...
