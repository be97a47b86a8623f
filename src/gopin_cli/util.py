from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from gopin_core.errors import EnvironmentCheckError
from gopin_core.report import Reporter


def configure_logging(level: str = "warning") -> None:
    """Route library logging through rich on stderr."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))


def current_dir() -> Path:
    try:
        return Path.cwd()
    except OSError as exc:
        raise EnvironmentCheckError("could not get current dir") from exc


def fail(reporter: Reporter, message: str) -> typer.Exit:
    """Print a fatal ``>> `` message and return the exit to raise."""
    reporter.fatal(message)
    return typer.Exit(1)
