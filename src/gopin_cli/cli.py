from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .commands.doctor import doctor as doctor_fn
from .commands.pin import pin as pin_fn

app = typer.Typer(help="gopin: pin Go package dependencies to VCS revisions listed in a Godeps file")


@app.callback(invoke_without_command=True)
def _main(
    ctx: typer.Context,
    godeps_file: Optional[Path] = typer.Option(
        None, "-f", "--file",
        help="Godeps file path (default: ./Godeps)",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config",
        help="gopin.toml path (default: ./gopin.toml if present)",
    ),
    jobs: Optional[int] = typer.Option(
        None, "--jobs", "-j", min=1,
        help="Pin up to N packages concurrently",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout",
        help="Seconds to wait for each fetch or checkout command",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """Fetch each package in the manifest and check out its pinned revision."""
    if ctx.invoked_subcommand is not None:
        return
    pin_fn(
        godeps_file=godeps_file,
        config_path=config_path,
        jobs=jobs,
        timeout=timeout,
        verbose=verbose,
    )


app.command(name="doctor")(doctor_fn)


def main():
    app()
