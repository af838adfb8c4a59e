"""Tree navigation: visible flattening, lookup by identity, agenda."""

from collections.abc import Iterator
from datetime import datetime, timedelta

from orgtask.config import AGENDA_DAYS
from orgtask.models.item import Document, Item


def flatten_visible(document: Document) -> list[Item]:
    """Return items in depth-first pre-order, skipping subtrees of folded items.

    A folded item is itself included; everything below it is not.
    """
    result: list[Item] = []

    def walk(items: list[Item]) -> None:
        for item in items:
            result.append(item)
            if not item.folded:
                walk(item.children)

    walk(document.items)
    return result


def iter_items(document: Document) -> Iterator[Item]:
    """Yield every item in pre-order, ignoring folds."""
    todo = list(reversed(document.items))
    while todo:
        item = todo.pop()
        yield item
        todo.extend(reversed(item.children))


def find_container(document: Document, target: Item) -> list[Item] | None:
    """Return the list that holds ``target`` (roots or a parent's children).

    Matching is by identity. Returns None if ``target`` is not in the tree.
    """
    if any(item is target for item in document.items):
        return document.items
    for item in iter_items(document):
        if any(child is target for child in item.children):
            return item.children
    return None


def agenda_items(document: Document, *, now: datetime | None = None) -> list[Item]:
    """Items scheduled or due before the end of the agenda window.

    Folding is ignored. An item with both a scheduled date and a deadline in
    the window is listed once for each.
    """
    now = now or datetime.now()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end_of_window = start_of_day + timedelta(days=AGENDA_DAYS)

    result: list[Item] = []
    for item in iter_items(document):
        if item.scheduled is not None and item.scheduled < end_of_window:
            result.append(item)
        if item.deadline is not None and item.deadline < end_of_window:
            result.append(item)
    return result
