"""Append-only error log for one orchestration."""

import logging
from pathlib import Path
from typing import Iterator, List, Optional

from config.models import ErrorEntry

logger = logging.getLogger(__name__)

RED = "\x1b[31m"
RESET = "\x1b[0m"


class ErrorLog:
    """
    Ordered (context, message) diagnostics.

    Every entry is logged at ERROR and, when a path is given, appended to that
    file. The file is truncated when the log is created so it only holds
    errors from the current orchestration.
    """

    def __init__(self, path: Optional[str] = None):
        self._entries: List[ErrorEntry] = []
        self.path = Path(path) if path else None
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("", encoding="utf-8")

    def append(self, context: str, message: str) -> ErrorEntry:
        entry = ErrorEntry(context=context, message=message)
        self._entries.append(entry)
        logger.error(f"{RED}>>> Error:{RESET} {message}")

        if self.path is not None:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(f"{message}\n\n")
        return entry

    @property
    def entries(self) -> List[ErrorEntry]:
        return list(self._entries)

    def for_context(self, context: str) -> List[ErrorEntry]:
        return [e for e in self._entries if e.context == context]

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
