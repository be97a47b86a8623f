"""Core types for pinning Go packages to VCS revisions."""

from .errors import (
    CommandError,
    ConfigError,
    EnvironmentCheckError,
    FetchError,
    GopinError,
    MalformedLineError,
    ManifestOpenError,
    PackageNotFoundError,
)
from .manifest import ManifestEntry, parse_line
from .vcs import VCS_REGISTRY, VcsDescriptor, detect_vcs

__all__ = [
    "CommandError",
    "ConfigError",
    "EnvironmentCheckError",
    "FetchError",
    "GopinError",
    "MalformedLineError",
    "ManifestEntry",
    "ManifestOpenError",
    "PackageNotFoundError",
    "VCS_REGISTRY",
    "VcsDescriptor",
    "detect_vcs",
    "parse_line",
]
