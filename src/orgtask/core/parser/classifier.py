"""Per-line classification of outline text.

Drawers and code blocks are regions whose lines must never be read as
headings. The classifier tracks which region the scan is in and tells the
tree builder what to do with each line.
"""

from collections.abc import Iterable, Iterator
from enum import Enum

from orgtask.config import CODE_BLOCK_BEGIN, CODE_BLOCK_END, DRAWER_END, DRAWER_START


class ScanMode(Enum):
    """Region the scanner is currently in.

    A code block may open inside a drawer; the drawer resumes once the block
    closes. A drawer never opens inside a code block.
    """

    NORMAL = "normal"
    IN_DRAWER = "in_drawer"
    IN_CODE_BLOCK = "in_code_block"


class LineKind(Enum):
    """Verdict for a single line."""

    DRAWER_BOUNDARY = "drawer_boundary"
    CODE_BOUNDARY = "code_boundary"
    # Inside a code block: copy to notes, interpret nothing.
    VERBATIM = "verbatim"
    # Inside a drawer: may carry directives, never a heading.
    CONTENT = "content"
    # Outside any region: try the heading grammar, then directives.
    CANDIDATE = "candidate"


def is_drawer_start(line: str) -> bool:
    return line.strip() == DRAWER_START


def is_drawer_end(line: str) -> bool:
    return line.strip() == DRAWER_END


def is_code_block_begin(line: str) -> bool:
    return line.lstrip().startswith(CODE_BLOCK_BEGIN)


def is_code_block_end(line: str) -> bool:
    return line.lstrip().startswith(CODE_BLOCK_END)


class LineClassifier:
    """State machine over ScanMode.

    An unclosed region is not an error: the mode simply stays set until the
    input ends.
    """

    def __init__(self) -> None:
        self.mode = ScanMode.NORMAL
        # Mode to return to when the current code block closes.
        self._resume = ScanMode.NORMAL

    def classify(self, line: str) -> LineKind:
        if self.mode is ScanMode.IN_CODE_BLOCK:
            if is_code_block_end(line):
                self.mode = self._resume
                self._resume = ScanMode.NORMAL
                return LineKind.CODE_BOUNDARY
            return LineKind.VERBATIM

        if is_code_block_begin(line):
            self._resume = self.mode
            self.mode = ScanMode.IN_CODE_BLOCK
            return LineKind.CODE_BOUNDARY

        if self.mode is ScanMode.IN_DRAWER:
            if is_drawer_end(line):
                self.mode = ScanMode.NORMAL
                return LineKind.DRAWER_BOUNDARY
            if is_drawer_start(line):
                return LineKind.DRAWER_BOUNDARY
            return LineKind.CONTENT

        if is_drawer_start(line):
            self.mode = ScanMode.IN_DRAWER
            return LineKind.DRAWER_BOUNDARY
        return LineKind.CANDIDATE


def lines_outside_code(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(index, line)`` for lines that are not part of a code block.

    Code-block boundary lines are skipped too. Used when editing notes, so
    that text quoted inside ``#+BEGIN_SRC`` is never taken for a drawer or a
    directive.
    """
    classifier = LineClassifier()
    for i, line in enumerate(lines):
        kind = classifier.classify(line)
        if kind is LineKind.VERBATIM or kind is LineKind.CODE_BOUNDARY:
            continue
        yield i, line
