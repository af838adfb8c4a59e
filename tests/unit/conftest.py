"""Shared test fixtures."""

from pathlib import Path

import pytest

from orgtask.core.parser.tree_builder import parse_text
from orgtask.models.item import Document
from tests.unit.samples import SAMPLE_OUTLINE


@pytest.fixture
def sample_path(tmp_path: Path) -> Path:
    path = tmp_path / "todo.org"
    path.write_text(SAMPLE_OUTLINE, encoding="utf-8")
    return path


@pytest.fixture
def sample_document(tmp_path: Path) -> Document:
    """The sample outline parsed in memory, bound to a path under tmp_path."""
    return parse_text(SAMPLE_OUTLINE, path=tmp_path / "todo.org")
