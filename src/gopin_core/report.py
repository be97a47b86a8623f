"""User-facing ``>> `` diagnostics.

Progress goes to stdout, warnings and fatal messages to stderr.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from rich.console import Console

PREFIX = ">> "


def _plain_console(stderr: bool = False) -> Console:
    return Console(stderr=stderr, soft_wrap=True, highlight=False, emoji=False, markup=False)


class Reporter:
    """Prints prefixed messages and remembers the warnings it emitted."""

    def __init__(self, out: Optional[Console] = None, err: Optional[Console] = None) -> None:
        self.out = out or _plain_console()
        self.err = err or _plain_console(stderr=True)
        self.warnings: List[str] = []
        self._lock = threading.Lock()

    def info(self, message: str) -> None:
        self.out.print(PREFIX + message, markup=False, emoji=False, highlight=False)

    def warn(self, message: str) -> None:
        with self._lock:
            self.warnings.append(message)
        self.err.print(PREFIX + message, markup=False, emoji=False, highlight=False)

    def fatal(self, message: str) -> None:
        self.err.print(PREFIX + message, markup=False, emoji=False, highlight=False)
