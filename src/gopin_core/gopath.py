"""Locate the source directory for a Go import path.

Follows the GOPATH-mode ``go/build`` find-only rules: relative imports
against the importing directory, then vendor trees, then GOROOT, then each
GOPATH workspace in order.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence

from .errors import PackageNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageLocation:
    """Where an import path lives on disk."""
    import_path: str
    directory: Path
    root: Optional[Path] = None  # source root (".../src") it was found under
    goroot: bool = False
    vendored: bool = False


def split_gopath(value: str | None) -> List[Path]:
    """Split a GOPATH value into usable workspace roots."""
    roots: List[Path] = []
    for raw in (value or "").split(os.pathsep):
        raw = raw.strip()
        # go/build ignores empty entries and unexpanded home directories
        if not raw or raw.startswith("~"):
            continue
        roots.append(Path(raw))
    return roots


def is_local_import(import_path: str) -> bool:
    return import_path in (".", "..") or import_path.startswith(("./", "../"))


def _has_go_files(directory: Path) -> bool:
    try:
        return any(child.suffix == ".go" and child.is_file() for child in directory.iterdir())
    except OSError:
        return False


def _import_parts(import_path: str) -> Sequence[str]:
    return PurePosixPath(import_path).parts


def _search_vendor(import_path: str, src_dir: Path, src_roots: Sequence[Path]) -> Optional[PackageLocation]:
    parts = _import_parts(import_path)
    for root in src_roots:
        try:
            rel = src_dir.relative_to(root)
        except ValueError:
            continue
        sub = rel.parts
        # innermost vendor directory wins
        for depth in range(len(sub), -1, -1):
            candidate = root.joinpath(*sub[:depth], "vendor", *parts)
            if candidate.is_dir() and _has_go_files(candidate):
                return PackageLocation(import_path, candidate, root=root, vendored=True)
        return None
    return None


def resolve_import_path(
    import_path: str,
    src_dir: Path,
    gopath: Sequence[Path],
    goroot: Optional[Path] = None,
) -> PackageLocation:
    """Return the directory holding ``import_path``.

    Raises ``PackageNotFoundError`` with the list of searched directories
    when nothing matches.
    """
    if not import_path:
        raise PackageNotFoundError(import_path, reason="empty import path")

    src_dir = Path(src_dir)
    if is_local_import(import_path):
        directory = (src_dir / import_path).resolve()
        if directory.is_dir():
            return PackageLocation(import_path, directory)
        raise PackageNotFoundError(import_path, [directory])

    if os.path.isabs(import_path):
        raise PackageNotFoundError(import_path, reason="cannot import absolute path")

    goroot_src = goroot / "src" if goroot else None
    workspaces = [p for p in gopath if goroot is None or p != goroot]
    src_roots: List[Path] = ([goroot_src] if goroot_src else []) + [p / "src" for p in workspaces]

    vendored = _search_vendor(import_path, src_dir, src_roots)
    if vendored is not None:
        logger.debug(f"Resolved {import_path} to vendored {vendored.directory}")
        return vendored

    parts = _import_parts(import_path)
    searched: List[Path] = []
    if goroot_src is not None:
        candidate = goroot_src.joinpath(*parts)
        searched.append(candidate)
        if candidate.is_dir():
            return PackageLocation(import_path, candidate, root=goroot_src, goroot=True)

    for workspace in workspaces:
        root = workspace / "src"
        candidate = root.joinpath(*parts)
        searched.append(candidate)
        if candidate.is_dir():
            logger.debug(f"Resolved {import_path} to {candidate}")
            return PackageLocation(import_path, candidate, root=root)

    raise PackageNotFoundError(import_path, searched)
