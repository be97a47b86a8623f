"""
doctor.py - Environment health check command.

Checks the fetch tool, GOPATH, the manifest and the VCS tools.
"""

from __future__ import annotations

import json
import os
import shutil
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Callable, List, Mapping, Optional

import typer
from rich.console import Console
from rich.table import Table

from gopin_core.config import PinConfig, load_config
from gopin_core.errors import ConfigError, EnvironmentCheckError, MalformedLineError
from gopin_core.manifest import iter_entries
from gopin_core.vcs import VCS_REGISTRY

from ..util import current_dir

console = Console()

Which = Callable[[str], Optional[str]]


@dataclass
class CheckResult:
    """Result of a single check."""
    name: str
    passed: bool
    message: str
    details: Optional[str] = None
    required: bool = True


@dataclass
class DoctorResult:
    """Overall doctor check result."""
    all_passed: bool
    checks: List[CheckResult]


def check_fetch_tool(tool: str, which: Which = shutil.which) -> CheckResult:
    """Check that the fetch tool is on PATH."""
    found = which(tool)
    if found is None:
        return CheckResult(
            name="Fetch Tool",
            passed=False,
            message=f"'{tool}' not found in PATH",
            details="Install Go or set [fetch].tool / GOPIN_FETCH_TOOL",
        )
    return CheckResult(name="Fetch Tool", passed=True, message=f"{tool}: {found}")


def check_gopath(config: PinConfig) -> CheckResult:
    """Check that GOPATH is set and its workspaces have a src tree."""
    if not config.gopath:
        return CheckResult(
            name="GOPATH",
            passed=False,
            message="GOPATH not set",
            details="Export GOPATH to point at your Go workspace",
        )
    missing = [str(p / "src") for p in config.gopath if not (p / "src").is_dir()]
    roots = os.pathsep.join(str(p) for p in config.gopath)
    if missing:
        return CheckResult(
            name="GOPATH",
            passed=True,
            message=roots,
            details=f"No src directory yet: {', '.join(missing)}",
        )
    return CheckResult(name="GOPATH", passed=True, message=roots)


def check_manifest(manifest_path: Path) -> CheckResult:
    """Check that the manifest is readable and count its entries."""
    try:
        with manifest_path.open("r", encoding="utf-8", errors="replace") as fh:
            items = list(iter_entries(line.rstrip("\r\n") for line in fh))
    except OSError as exc:
        return CheckResult(
            name="Manifest",
            passed=False,
            message=f"could not open Godeps file: {manifest_path}",
            details=str(exc),
        )

    bad = [num for num, item in items if isinstance(item, MalformedLineError)]
    entries = len(items) - len(bad)
    message = f"{entries} entr{'y' if entries == 1 else 'ies'} in {manifest_path}"
    if bad:
        return CheckResult(
            name="Manifest",
            passed=False,
            message=message,
            details=f"Malformed lines: {', '.join(str(n) for n in bad)}",
        )
    return CheckResult(name="Manifest", passed=True, message=message)


def check_vcs_tools(which: Which = shutil.which) -> List[CheckResult]:
    """Report which VCS tools are available; missing ones are informational."""
    results = []
    for vcs in VCS_REGISTRY:
        found = which(vcs.tool)
        results.append(
            CheckResult(
                name=f"{vcs.name} ({vcs.tool})",
                passed=found is not None,
                message=found or f"not found; {vcs.name} packages cannot be pinned",
                required=False,
            )
        )
    return results


def run_doctor(
    godeps_file: Optional[Path] = None,
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    which: Which = shutil.which,
) -> DoctorResult:
    """Run all doctor checks."""
    try:
        working_dir = current_dir()
    except EnvironmentCheckError as exc:
        checks = [
            CheckResult(
                name="Working Directory",
                passed=False,
                message=str(exc),
                details=str(exc.__cause__) if exc.__cause__ else None,
            )
        ]
        return DoctorResult(all_passed=False, checks=checks)

    try:
        config = load_config(
            working_dir,
            manifest_path=godeps_file,
            config_path=config_path,
            environ=environ,
            require_gopath=False,
        )
    except ConfigError as exc:
        checks = [
            CheckResult(
                name="Configuration",
                passed=False,
                message="Invalid configuration",
                details="\n".join(exc.errors),
            )
        ]
        return DoctorResult(all_passed=False, checks=checks)

    checks = [
        check_fetch_tool(config.fetch_tool, which),
        check_gopath(config),
        check_manifest(config.manifest_path),
        *check_vcs_tools(which),
    ]
    all_passed = all(c.passed for c in checks if c.required)
    return DoctorResult(all_passed=all_passed, checks=checks)


def format_result_plain(result: DoctorResult) -> None:
    """Print result in plain text format."""
    table = Table(title="gopin doctor", show_header=True)
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Message")

    for check in result.checks:
        if check.passed:
            status = "[green]PASS[/green]"
        elif check.required:
            status = "[red]FAIL[/red]"
        else:
            status = "[yellow]MISSING[/yellow]"
        table.add_row(check.name, status, check.message)
        if check.details:
            table.add_row("", "", f"[dim]{check.details}[/dim]")

    console.print(table)

    if result.all_passed:
        console.print("\n[green bold]All checks passed![/green bold]")
    else:
        console.print("\n[red bold]Some checks failed.[/red bold]")


def format_result_json(result: DoctorResult) -> None:
    """Print result in JSON format."""
    output = {
        "all_passed": result.all_passed,
        "checks": [asdict(c) for c in result.checks],
    }
    print(json.dumps(output, indent=2))


def doctor(
    godeps_file: Optional[Path] = typer.Option(
        None, "-f", "--file",
        help="Godeps file path (default: ./Godeps)",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config",
        help="gopin.toml path (default: ./gopin.toml if present)",
    ),
    format: str = typer.Option(
        "plain", "--format",
        help="Output format: plain, json",
    ),
) -> None:
    """
    Check environment health.

    Verifies:
    - The fetch tool is on PATH
    - GOPATH is set
    - The manifest is readable and well-formed
    - Which VCS tools are available
    """
    result = run_doctor(godeps_file=godeps_file, config_path=config_path)

    if format == "json":
        format_result_json(result)
    else:
        format_result_plain(result)

    raise typer.Exit(0 if result.all_passed else 1)
