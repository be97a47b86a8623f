"""Configuration loading.

Precedence, highest first: CLI overrides, environment, TOML config file,
built-in defaults.
"""

from __future__ import annotations

import copy
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import ConfigError, EnvironmentCheckError
from .gopath import split_gopath

CONFIG_FILENAME = "gopin.toml"
DEFAULT_MANIFEST_NAME = "Godeps"
DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "manifest": {
        "path": DEFAULT_MANIFEST_NAME,
    },
    "fetch": {
        "tool": "go",
        "timeout": None,
        "gopath_mode": True,
    },
    "checkout": {
        "timeout": None,
    },
    "run": {
        "jobs": 1,
    },
    "log": {
        "verbosity": "warning",
    },
}
LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass(frozen=True)
class PinConfig:
    """Effective settings for one gopin run."""
    working_dir: Path
    manifest_path: Path
    gopath: Tuple[Path, ...]
    goroot: Optional[Path] = None
    fetch_tool: str = "go"
    fetch_timeout: Optional[float] = None
    gopath_mode: bool = True
    checkout_timeout: Optional[float] = None
    jobs: int = 1
    log_verbosity: str = "warning"


def _env_str(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name, "").strip()
    return value or None


def _env_int(environ: Mapping[str, str], name: str) -> Optional[int]:
    raw = _env_str(environ, name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError([f"{name} must be an integer, got {raw!r}"]) from None


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _is_timeout(value: Any) -> bool:
    return value is None or (isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0)


def validate_config(cfg: Mapping[str, Any]) -> List[str]:
    """Return a list of problems with a merged configuration mapping."""
    errors: List[str] = []
    for table, values in cfg.items():
        if table not in DEFAULT_CONFIG:
            errors.append(f"unknown table [{table}]")
            continue
        if not isinstance(values, Mapping):
            errors.append(f"[{table}] must be a table")
            continue
        for key in values:
            if key not in DEFAULT_CONFIG[table]:
                errors.append(f"unknown key [{table}].{key}")
    if errors:
        return errors

    if not isinstance(cfg["manifest"]["path"], str) or not cfg["manifest"]["path"].strip():
        errors.append("[manifest].path must be a non-empty string")
    tool = cfg["fetch"]["tool"]
    if not isinstance(tool, str) or not tool.strip():
        errors.append("[fetch].tool must be a non-empty string")
    if not _is_timeout(cfg["fetch"]["timeout"]):
        errors.append("[fetch].timeout must be a positive number")
    if not isinstance(cfg["fetch"]["gopath_mode"], bool):
        errors.append("[fetch].gopath_mode must be a boolean")
    if not _is_timeout(cfg["checkout"]["timeout"]):
        errors.append("[checkout].timeout must be a positive number")
    jobs = cfg["run"]["jobs"]
    if not isinstance(jobs, int) or isinstance(jobs, bool) or jobs < 1:
        errors.append("[run].jobs must be an integer >= 1")
    if cfg["log"]["verbosity"] not in LOG_LEVELS:
        errors.append(f"[log].verbosity must be one of: {', '.join(LOG_LEVELS)}")
    return errors


def resolve_config_path(
    working_dir: Path,
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """Pick the config file to read, or ``None`` when there is none."""
    env = os.environ if environ is None else environ
    if config_path is not None:
        explicit = Path(config_path)
    elif _env_str(env, "GOPIN_CONFIG"):
        explicit = Path(_env_str(env, "GOPIN_CONFIG"))
    else:
        default = working_dir / CONFIG_FILENAME
        return default if default.is_file() else None
    if not explicit.is_absolute():
        explicit = working_dir / explicit
    if not explicit.is_file():
        raise ConfigError([f"config file not found: {explicit}"])
    return explicit


def load_config_file(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError([f"TOML parse error: {exc}"], source=path) from exc
    except OSError as exc:
        raise ConfigError([f"could not read config: {exc}"], source=path) from exc


def load_config(
    working_dir: Path,
    *,
    manifest_path: Optional[Path] = None,
    config_path: Optional[Path] = None,
    jobs: Optional[int] = None,
    timeout: Optional[float] = None,
    environ: Optional[Mapping[str, str]] = None,
    require_gopath: bool = True,
) -> PinConfig:
    """Build the effective ``PinConfig``.

    Raises ``ConfigError`` for an invalid file or override and
    ``EnvironmentCheckError`` when GOPATH is unset and ``require_gopath``
    is true.
    """
    env = os.environ if environ is None else environ
    source = resolve_config_path(working_dir, config_path, env)
    cfg = _deep_merge(DEFAULT_CONFIG, load_config_file(source))

    env_tool = _env_str(env, "GOPIN_FETCH_TOOL")
    if env_tool:
        cfg["fetch"]["tool"] = env_tool
    env_jobs = _env_int(env, "GOPIN_JOBS")
    if env_jobs is not None:
        cfg["run"]["jobs"] = env_jobs

    if manifest_path is not None:
        cfg["manifest"]["path"] = str(manifest_path)
    if jobs is not None:
        cfg["run"]["jobs"] = jobs
    if timeout is not None:
        cfg["fetch"]["timeout"] = timeout
        cfg["checkout"]["timeout"] = timeout

    errors = validate_config(cfg)
    if errors:
        raise ConfigError(errors, source=source)

    gopath = split_gopath(_env_str(env, "GOPATH"))
    if not gopath and require_gopath:
        raise EnvironmentCheckError("GOPATH not set")
    goroot_raw = _env_str(env, "GOROOT")

    manifest = Path(cfg["manifest"]["path"])
    if not manifest.is_absolute():
        manifest = working_dir / manifest

    return PinConfig(
        working_dir=working_dir,
        manifest_path=manifest,
        gopath=tuple(gopath),
        goroot=Path(goroot_raw) if goroot_raw else None,
        fetch_tool=cfg["fetch"]["tool"],
        fetch_timeout=cfg["fetch"]["timeout"],
        gopath_mode=cfg["fetch"]["gopath_mode"],
        checkout_timeout=cfg["checkout"]["timeout"],
        jobs=cfg["run"]["jobs"],
        log_verbosity=cfg["log"]["verbosity"],
    )
