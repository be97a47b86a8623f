"""Read a Godeps manifest and pin every entry in it."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from gopin_core.config import PinConfig
from gopin_core.errors import MalformedLineError, ManifestOpenError
from gopin_core.manifest import ManifestEntry, iter_entries
from gopin_core.report import Reporter

from .pin import LineOutcome, RevisionPinner

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    lines_read: int = 0
    malformed: List[int] = field(default_factory=list)
    outcomes: List[LineOutcome] = field(default_factory=list)

    @property
    def pinned(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.pinned


class _CountingLines:
    """Iterates a text stream without line endings, counting physical lines."""

    def __init__(self, handle) -> None:
        self._handle = handle
        self.count = 0

    def __iter__(self):
        for line in self._handle:
            self.count += 1
            yield line.rstrip("\r\n")


def run_manifest(
    config: PinConfig,
    reporter: Reporter,
    pinner: Optional[RevisionPinner] = None,
) -> RunSummary:
    """Pin every entry of ``config.manifest_path``.

    Raises ``ManifestOpenError`` if the manifest cannot be opened; every
    other problem is a per-line warning and the run continues.
    """
    pinner = pinner or RevisionPinner(config, reporter)
    summary = RunSummary()
    try:
        handle = config.manifest_path.open("r", encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ManifestOpenError(config.manifest_path, str(exc)) from exc

    pending: List[ManifestEntry] = []
    with handle:
        lines = _CountingLines(handle)
        for line_number, item in iter_entries(lines):
            if isinstance(item, MalformedLineError):
                summary.malformed.append(line_number)
                reporter.warn(str(item))
                continue
            if config.jobs > 1:
                pending.append(item)
            else:
                summary.outcomes.append(pinner.pin(item))
        summary.lines_read = lines.count

    if pending:
        with ThreadPoolExecutor(max_workers=config.jobs) as pool:
            summary.outcomes.extend(pool.map(pinner.pin, pending))

    logger.info(
        f"Processed {summary.lines_read} lines from {config.manifest_path}: "
        f"{summary.pinned} pinned, {summary.failed} failed, {len(summary.malformed)} malformed"
    )
    return summary
