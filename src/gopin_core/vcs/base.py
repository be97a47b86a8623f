"""VCS descriptor types."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

REVISION_SLOT = "{revision}"


@dataclass(frozen=True)
class VcsDescriptor:
    """How to recognise a VCS-managed tree and move it to a revision."""
    name: str  # display name, e.g. "Git"
    tool: str  # command on PATH, e.g. "git"
    marker: str  # relative path whose presence identifies the VCS
    checkout_template: Tuple[str, ...]  # argument tokens, one of them REVISION_SLOT
    marker_may_be_file: bool = False

    def __post_init__(self) -> None:
        slots = sum(1 for token in self.checkout_template if token == REVISION_SLOT)
        if slots != 1:
            raise ValueError(
                f"checkout template for {self.name} must contain exactly one "
                f"{REVISION_SLOT} token, found {slots}"
            )

    def checkout_args(self, revision: str) -> List[str]:
        """Return the tool arguments that move a tree to ``revision``."""
        return [revision if token == REVISION_SLOT else token for token in self.checkout_template]

    def detect(self, repo_root: Path) -> bool:
        """Check if this VCS manages ``repo_root``.

        A missing marker means "not present". Any other stat failure is
        raised as ``OSError`` so the caller can report it.
        """
        try:
            st = (repo_root / self.marker).stat()
        except FileNotFoundError:
            return False
        if stat.S_ISDIR(st.st_mode):
            return True
        return self.marker_may_be_file and stat.S_ISREG(st.st_mode)
