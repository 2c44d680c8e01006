"""
Unified data model exports for verspan.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``verspan.models`` instead of individual submodules.

Example:
    >>> from verspan.models import ConstraintSet, Version, VersionRange
"""

from __future__ import annotations

from verspan.models.version import (
    EndsAt,
    PreRelease,
    PreReleaseType,
    Version,
    compare_versions,
    parse_version,
    sorted_versions,
    upper_for_wildcard,
)
from verspan.models.version_range import (
    VersionRange,
    compare_ranges,
    complement,
    intersect,
)
from verspan.models.constraint import (
    ALWAYS_MATCH,
    NEVER_MATCH,
    ConstraintSet,
    ExportResult,
    MatchSentinel,
    RangeExport,
)
from verspan.models.environment import (
    Architecture,
    OperatingSystem,
    parse_architecture,
    parse_operating_system,
)
from verspan.models.requirement import Requirement

__all__ = [
    # Versions
    "EndsAt",
    "PreRelease",
    "PreReleaseType",
    "Version",
    "compare_versions",
    "parse_version",
    "sorted_versions",
    "upper_for_wildcard",
    # Ranges
    "VersionRange",
    "compare_ranges",
    "complement",
    "intersect",
    # Constraint sets
    "ALWAYS_MATCH",
    "NEVER_MATCH",
    "ConstraintSet",
    "ExportResult",
    "MatchSentinel",
    "RangeExport",
    # Environment
    "Architecture",
    "OperatingSystem",
    "parse_architecture",
    "parse_operating_system",
    # Requirements
    "Requirement",
]
