from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from gopin_core.errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    args: tuple
    returncode: int
    output: str  # stdout and stderr, interleaved

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def error(self) -> str:
        return f"exit status {self.returncode}"


def run_command(
    args: Sequence[str],
    *,
    cwd: Optional[Path] = None,
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> CommandResult:
    """Run ``args`` to completion and capture combined output.

    ``env`` is layered over the current environment. Raises ``CommandError``
    when the program cannot be started or exceeds ``timeout``; a non-zero
    exit is reported through ``CommandResult.returncode`` instead.
    """
    full_env = None
    if env:
        full_env = dict(os.environ)
        full_env.update(env)
    logger.debug(f"Running {' '.join(args)} (cwd={cwd})")
    try:
        proc = subprocess.run(
            list(args),
            cwd=str(cwd) if cwd is not None else None,
            env=full_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        output = exc.output or ""
        if isinstance(output, bytes):
            output = output.decode("utf-8", errors="replace")
        raise CommandError(args, f"timed out after {timeout}s", output) from exc
    except (OSError, ValueError) as exc:
        # ValueError: arguments the OS cannot take, e.g. an embedded NUL
        raise CommandError(args, str(exc)) from exc
    return CommandResult(args=tuple(args), returncode=proc.returncode, output=proc.stdout or "")


CommandRunner = Callable[..., CommandResult]


def format_output(output: str) -> str:
    """Indent continuation lines so multi-line tool output stays readable."""
    return "\n     ".join(output.rstrip("\n").split("\n"))
