"""Static table of supported version-control systems.

Adding a VCS is a data-only change: append a descriptor below.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .base import REVISION_SLOT, VcsDescriptor

VCS_GIT = VcsDescriptor(
    name="Git",
    tool="git",
    marker=".git",
    checkout_template=("checkout", REVISION_SLOT),
    # submodules and worktrees use a .git file pointing at the real gitdir
    marker_may_be_file=True,
)

VCS_HG = VcsDescriptor(
    name="Mercurial",
    tool="hg",
    marker=".hg",
    checkout_template=("update", "-C", "-r", REVISION_SLOT),
)

VCS_SVN = VcsDescriptor(
    name="Subversion",
    tool="svn",
    marker=".svn",
    checkout_template=("update", "-r", REVISION_SLOT),
)

VCS_BZR = VcsDescriptor(
    name="Bazaar",
    tool="bzr",
    marker=".bzr",
    checkout_template=("pull", "--overwrite", "-r", REVISION_SLOT),
)

# Priority order; breaks ties when a tree carries several markers.
VCS_REGISTRY: Tuple[VcsDescriptor, ...] = (VCS_GIT, VCS_HG, VCS_SVN, VCS_BZR)


def lookup_vcs(name: str) -> Optional[VcsDescriptor]:
    """Find a descriptor by tool name or display name (case-insensitive)."""
    wanted = name.strip().lower()
    for vcs in VCS_REGISTRY:
        if wanted in (vcs.tool, vcs.name.lower()):
            return vcs
    return None
