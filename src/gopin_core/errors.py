"""Exception hierarchy shared by the core, ops and CLI packages."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class GopinError(Exception):
    """Base class for all gopin errors."""


class ConfigError(GopinError):
    """Configuration file or override is invalid."""

    def __init__(self, errors: Sequence[str], source: Path | None = None) -> None:
        self.errors = list(errors)
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"invalid configuration{where}: " + "; ".join(self.errors))


class EnvironmentCheckError(GopinError):
    """A startup precondition (tool on PATH, GOPATH, working dir) failed."""


class ManifestOpenError(GopinError):
    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"could not open Godeps file: {path}")


class MalformedLineError(GopinError, ValueError):
    """A manifest line has fewer than two tokens."""

    def __init__(self, line_number: int, line: str = "") -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(f"bad line {line_number}, skipping...")


class PackageNotFoundError(GopinError):
    def __init__(self, import_path: str, searched: Sequence[Path] = (), reason: str = "") -> None:
        self.import_path = import_path
        self.searched = list(searched)
        self.reason = reason or "cannot find package"
        super().__init__(f"{self.reason} {import_path!r}")


class CommandError(GopinError):
    """An external command could not be started, timed out or failed."""

    def __init__(self, args: Sequence[str], message: str, output: str = "") -> None:
        self.command = list(args)
        self.output = output
        super().__init__(message)


class FetchError(CommandError):
    def __init__(self, import_path: str, message: str, output: str = "", args: Sequence[str] = ()) -> None:
        self.import_path = import_path
        super().__init__(args, message, output)
