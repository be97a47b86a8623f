"""Per-entry pinning: fetch, locate, detect VCS, checkout.

Every failure is reported as a warning for that entry only; nothing here
raises past ``RevisionPinner.pin``.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional

from gopin_core.config import PinConfig
from gopin_core.errors import CommandError, FetchError, MalformedLineError, PackageNotFoundError
from gopin_core.gopath import PackageLocation, resolve_import_path
from gopin_core.manifest import ManifestEntry, parse_line
from gopin_core.report import Reporter
from gopin_core.vcs import VCS_REGISTRY, VcsDescriptor, detect_vcs

from .fetch import PackageFetcher
from .process import CommandRunner, format_output, run_command

logger = logging.getLogger(__name__)


def _enter_directory(directory: Path) -> None:
    """Raise ``OSError`` unless ``directory`` can be listed."""
    with os.scandir(directory):
        pass


class Stage(str, Enum):
    PARSED = "parsed"
    FETCHED = "fetched"
    LOCATED = "located"
    VCS_DETECTED = "vcs_detected"
    CHECKED_OUT = "checked_out"


@dataclass
class LineOutcome:
    """How far one entry got, and why it stopped."""
    entry: ManifestEntry
    stage: Stage
    location: Optional[PackageLocation] = None
    vcs: Optional[VcsDescriptor] = None
    warning: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.stage is Stage.CHECKED_OUT


class RevisionPinner:
    def __init__(
        self,
        config: PinConfig,
        reporter: Reporter,
        fetcher: Optional[PackageFetcher] = None,
        run: CommandRunner = run_command,
        which: Callable[[str], Optional[str]] = shutil.which,
        registry: Iterable[VcsDescriptor] = VCS_REGISTRY,
    ) -> None:
        self.config = config
        self.reporter = reporter
        self.fetcher = fetcher or PackageFetcher(
            config.fetch_tool,
            timeout=config.fetch_timeout,
            gopath_mode=config.gopath_mode,
            run=run,
        )
        self._run = run
        self._which = which
        self.registry = tuple(registry)

    def process_line(self, line: str, line_number: int) -> Optional[LineOutcome]:
        """Parse and pin one raw manifest line. Returns ``None`` when skipped."""
        try:
            entry = parse_line(line, line_number)
        except MalformedLineError as exc:
            self.reporter.warn(str(exc))
            return None
        if entry is None:
            return None
        return self.pin(entry)

    def _abort(self, outcome: LineOutcome, message: str) -> LineOutcome:
        outcome.warning = message
        self.reporter.warn(message)
        return outcome

    def pin(self, entry: ManifestEntry) -> LineOutcome:
        outcome = LineOutcome(entry=entry, stage=Stage.PARSED)
        path = entry.import_path

        self.reporter.info(f"getting package {path}")
        try:
            self.fetcher.fetch(path)
        except FetchError as exc:
            logger.debug(f"Fetch of {path} failed: {exc}")
            return self._abort(outcome, f"error getting: {path}")
        outcome.stage = Stage.FETCHED

        try:
            location = resolve_import_path(
                path,
                self.config.working_dir,
                self.config.gopath,
                self.config.goroot,
            )
        except PackageNotFoundError as exc:
            logger.debug(f"{exc}; searched: {', '.join(str(p) for p in exc.searched)}")
            return self._abort(outcome, f"could not get information about {path} - version not set")
        except OSError as exc:
            logger.debug(f"Resolving {path} failed: {exc}")
            return self._abort(outcome, f"could not get information about {path} - version not set")
        try:
            _enter_directory(location.directory)
        except OSError as exc:
            logger.debug(f"Cannot enter {location.directory}: {exc}")
            return self._abort(outcome, f"could not change to package dir: {location.directory}")
        outcome.location = location
        outcome.stage = Stage.LOCATED

        directory = location.directory
        vcs = detect_vcs(
            directory,
            self.registry,
            on_error=lambda failed, _exc: self.reporter.warn(
                f"could not check for dir '{failed.marker}' in {directory}"
            ),
        )
        if vcs is None:
            return self._abort(outcome, f"unknown VCS type for package {path}")
        outcome.vcs = vcs
        outcome.stage = Stage.VCS_DETECTED

        self.reporter.info(f"setting package {path} ({vcs.name}) to version: {entry.revision}")
        if self._which(vcs.tool) is None:
            return self._abort(outcome, f"tool '{vcs.tool}' was not found in PATH")

        return self._checkout(outcome, vcs, directory)

    def _checkout(self, outcome: LineOutcome, vcs: VcsDescriptor, directory: Path) -> LineOutcome:
        args = [vcs.tool, *vcs.checkout_args(outcome.entry.revision)]
        try:
            result = self._run(args, cwd=directory, timeout=self.config.checkout_timeout)
        except CommandError as exc:
            error, output = str(exc), exc.output
        else:
            if result.ok:
                outcome.stage = Stage.CHECKED_OUT
                return outcome
            error, output = result.error, result.output

        message = f"error setting version: {error}"
        outcome.warning = message
        self.reporter.warn(message)
        self.reporter.warn(f"output: {format_output(output)}")
        return outcome
