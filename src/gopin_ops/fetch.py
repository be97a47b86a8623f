"""Fetch package sources with the external ``go get`` tool."""

from __future__ import annotations

import logging
from typing import Optional

from gopin_core.errors import CommandError, FetchError

from .process import CommandResult, CommandRunner, run_command

logger = logging.getLogger(__name__)

# download only, update if already present
FETCH_ARGS = ("get", "-u", "-d")


class PackageFetcher:
    """Download or update a package's source tree in GOPATH."""

    def __init__(
        self,
        tool: str = "go",
        *,
        timeout: Optional[float] = None,
        gopath_mode: bool = True,
        run: CommandRunner = run_command,
    ) -> None:
        if not tool:
            raise ValueError("tool must be non-empty")
        self.tool = tool
        self.timeout = timeout
        self.gopath_mode = gopath_mode
        self._run = run

    def command(self, import_path: str) -> list:
        return [self.tool, *FETCH_ARGS, import_path]

    def fetch(self, import_path: str) -> CommandResult:
        """Run the fetch tool; raise ``FetchError`` unless it succeeds."""
        args = self.command(import_path)
        env = {"GO111MODULE": "off"} if self.gopath_mode else None
        try:
            result = self._run(args, timeout=self.timeout, env=env)
        except CommandError as exc:
            raise FetchError(import_path, str(exc), exc.output, args) from exc

        if result.output:
            logger.debug(f"{' '.join(args)}:\n{result.output}")
        if not result.ok:
            raise FetchError(import_path, result.error, result.output, args)
        return result
