"""
verspan — version ranges for package-index dependency resolution.

verspan parses package version identifiers and range specifiers into a
canonical, totally-ordered form and exports them in the shape a
dependency-resolution engine can consume: one contiguous allowed range
plus a list of excluded sub-ranges.

Features include:
    • PEP 440-style version parsing and ordering
    • Exact intersection, union and complement over version ranges
    • Comma-joined specifier parsing (``>=1.0,!=1.5,<2``)
    • Dependency line parsing with platform/architecture markers

Example:
    >>> from verspan import ConstraintSet
    >>> ConstraintSet.parse(">=1.0,<2.0").export().allowed_text
    '[1.0,2.0)'
"""

from __future__ import annotations

from verspan.__version__ import __version__
from verspan.models import (
    ALWAYS_MATCH,
    NEVER_MATCH,
    ConstraintSet,
    RangeExport,
    Requirement,
    Version,
    VersionRange,
    parse_version,
)
from verspan.core import ConstraintResolver, RequirementParser

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "verspan Contributors"
__license__ = "Apache-2.0"
__description__ = "Version ranges for package-index dependency resolution."

__all__ = [
    "__version__",
    "ALWAYS_MATCH",
    "NEVER_MATCH",
    "ConstraintSet",
    "ConstraintResolver",
    "RangeExport",
    "Requirement",
    "RequirementParser",
    "Version",
    "VersionRange",
    "parse_version",
]
