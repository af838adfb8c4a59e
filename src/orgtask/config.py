"""Configuration constants for orgtask."""

import os
from pathlib import Path

# Outline used when neither --file nor ORGTASK_FILE is given, relative to cwd.
DEFAULT_FILENAME: str = "todo.org"

# Environment variable naming the outline file.
OUTLINE_FILE_ENV: str = "ORGTASK_FILE"

# Agenda window, in days from the start of today.
AGENDA_DAYS: int = 7

# Text markers. Serializer duplicate checks use plain substring tests on these.
SCHEDULED_MARKER: str = "SCHEDULED:"
DEADLINE_MARKER: str = "DEADLINE:"
CLOCK_MARKER: str = "CLOCK:"
DRAWER_START: str = ":LOGBOOK:"
DRAWER_END: str = ":END:"
CODE_BLOCK_BEGIN: str = "#+BEGIN_SRC"
CODE_BLOCK_END: str = "#+END_SRC"


def resolve_outline_path(explicit: str | Path | None = None) -> Path:
    """Return the outline file to operate on.

    Precedence: explicit argument, then $ORGTASK_FILE, then ./todo.org.
    """
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.environ.get(OUTLINE_FILE_ENV)
    if from_env:
        return Path(from_env).expanduser()
    return Path.cwd() / DEFAULT_FILENAME
