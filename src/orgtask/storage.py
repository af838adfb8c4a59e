"""Load and save org outline files."""

from pathlib import Path

from loguru import logger

from orgtask.core.parser.tree_builder import parse_text
from orgtask.core.writer.serializer import serialize_document
from orgtask.models.item import Document


def _read(path: Path) -> str:
    # newline="" keeps line endings exactly as stored.
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def load(path: str | Path) -> Document:
    """Read and parse an outline file.

    A missing file gives an empty document bound to ``path``, so that the
    first save creates it. Every other OSError propagates.
    """
    path = Path(path)
    try:
        text = _read(path)
    except FileNotFoundError:
        logger.debug("{} does not exist yet, starting empty", path)
        return Document(path=path)
    return parse_text(text, path=path)


def save(document: Document) -> None:
    """Rewrite the whole file from the in-memory tree.

    Raises:
        OSError: If the file cannot be created or written.
    """
    contents = serialize_document(document)
    path = document.path

    action = "create"
    try:
        action = "unchanged" if _read(path) == contents else "update"
    except (FileNotFoundError, UnicodeDecodeError):
        pass

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(contents)
    logger.debug("Saved {} ({}, {} bytes)", path, action, len(contents.encode("utf-8")))


class FileStore:
    """OutlineStoreProtocol implementation backed by one file on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> Document:
        return load(self.path)

    def save(self, document: Document) -> None:
        save(document)
