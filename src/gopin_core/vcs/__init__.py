from .base import REVISION_SLOT, VcsDescriptor
from .detect import detect_vcs
from .registry import VCS_BZR, VCS_GIT, VCS_HG, VCS_REGISTRY, VCS_SVN, lookup_vcs

__all__ = [
    "REVISION_SLOT",
    "VCS_BZR",
    "VCS_GIT",
    "VCS_HG",
    "VCS_REGISTRY",
    "VCS_SVN",
    "VcsDescriptor",
    "detect_vcs",
    "lookup_vcs",
]
