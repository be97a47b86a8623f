"""Side-effecting operations: running tools, fetching and pinning packages."""

from .driver import RunSummary, run_manifest
from .fetch import PackageFetcher
from .pin import LineOutcome, RevisionPinner, Stage
from .process import CommandResult, run_command

__all__ = [
    "CommandResult",
    "LineOutcome",
    "PackageFetcher",
    "RevisionPinner",
    "RunSummary",
    "Stage",
    "run_command",
    "run_manifest",
]
