"""Determine which VCS manages a directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from .base import VcsDescriptor
from .registry import VCS_REGISTRY

logger = logging.getLogger(__name__)

ProbeErrorHandler = Callable[[VcsDescriptor, OSError], None]


def detect_vcs(
    directory: Path,
    registry: Iterable[VcsDescriptor] = VCS_REGISTRY,
    on_error: Optional[ProbeErrorHandler] = None,
) -> Optional[VcsDescriptor]:
    """Return the first descriptor in ``registry`` whose marker is in ``directory``.

    Stat errors other than "does not exist" are handed to ``on_error`` (or
    logged) and the search moves on to the next descriptor.
    """
    directory = Path(directory)
    for vcs in registry:
        try:
            present = vcs.detect(directory)
        except OSError as e:
            if on_error is not None:
                on_error(vcs, e)
            else:
                logger.warning(f"Could not check for {vcs.marker} in {directory}: {e}")
            continue
        if present:
            logger.debug(f"Detected {vcs.name} in {directory}")
            return vcs
    return None
