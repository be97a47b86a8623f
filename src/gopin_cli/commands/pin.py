"""
pin.py - Pin every package listed in a Godeps manifest.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from gopin_core.config import load_config
from gopin_core.errors import ConfigError, EnvironmentCheckError, ManifestOpenError
from gopin_core.report import Reporter
from gopin_ops.driver import RunSummary, run_manifest

from ..util import configure_logging, current_dir, fail


def pin(
    godeps_file: Optional[Path] = None,
    config_path: Optional[Path] = None,
    jobs: Optional[int] = None,
    timeout: Optional[float] = None,
    verbose: bool = False,
    reporter: Optional[Reporter] = None,
) -> RunSummary:
    """Check the environment, then pin from the manifest.

    Fatal problems print one ``>> `` message and raise ``typer.Exit(1)``.
    """
    reporter = reporter or Reporter()
    try:
        working_dir = current_dir()
        config = load_config(
            working_dir,
            manifest_path=godeps_file,
            config_path=config_path,
            jobs=jobs,
            timeout=timeout,
        )
    except (EnvironmentCheckError, ConfigError) as exc:
        raise fail(reporter, str(exc))

    configure_logging("debug" if verbose else config.log_verbosity)

    if shutil.which(config.fetch_tool) is None:
        raise fail(reporter, f"{config.fetch_tool} tool not found in PATH")

    try:
        return run_manifest(config, reporter)
    except ManifestOpenError as exc:
        raise fail(reporter, str(exc))
