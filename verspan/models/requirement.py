"""
Requirement data model for verspan.

This module defines a structured representation of a single dependency
line as found in a distribution's ``requires_dist`` metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from packaging.utils import canonicalize_name

from verspan.models.constraint import ALWAYS_MATCH, ConstraintSet, ExportResult
from verspan.models.environment import is_known_arch, is_known_os, tag_matches


@dataclass(frozen=True)
class Requirement:
    """
    A parsed dependency line.

    Attributes:
        name: Package name as written.
        constraint: Version constraint, or ``None`` if any version will do.
        os: Operating-system predicate from a ``sys_platform`` marker.
        arch: Architecture predicate from a ``platform_machine`` marker.
        applicable: ``False`` when guarded by an ``extra`` marker, which
            is not installed by default.
        raw_line: Original unmodified line text.
    """

    name: str
    constraint: Optional[ConstraintSet] = None
    os: Optional[str] = None
    arch: Optional[str] = None
    applicable: bool = True
    raw_line: Optional[str] = None

    @property
    def normalized_name(self) -> str:
        """Package name normalized per PEP 503."""
        return canonicalize_name(self.name)

    def is_understood(self) -> bool:
        """
        Check whether the environment predicates use known tags.

        Requirements for unknown platforms (e.g. ``sys_platform ==
        "cygwin"``) cannot be mapped onto a target and are excluded.

        Returns:
            True if both predicates are absent or recognized.
        """
        return is_known_os(self.os) and is_known_arch(self.arch)

    def applies_to(self, os: Optional[str], arch: Optional[str]) -> bool:
        """
        Check whether this requirement applies to a target environment.

        A missing predicate on either side matches anything.
        """
        return self.applicable and tag_matches(self.os, os) and tag_matches(self.arch, arch)

    def export(self, *, widen: bool = False) -> ExportResult:
        """Export the constraint; no constraint means every version."""
        if self.constraint is None:
            return ALWAYS_MATCH
        return self.constraint.export(widen=widen)

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to a JSON-compatible dictionary.

        Returns:
            JSON-safe requirement representation.
        """
        entry: Dict[str, Any] = {"name": self.name}
        if self.constraint is not None:
            entry["constraint"] = str(self.constraint)
        if self.os is not None:
            entry["os"] = self.os
        if self.arch is not None:
            entry["arch"] = self.arch
        if not self.applicable:
            entry["applicable"] = False
        return entry

    def __str__(self) -> str:
        """Return a compact human-readable form."""
        text = self.name
        if self.constraint is not None:
            text += f" {self.constraint}"
        predicates = [p for p in (self.os, self.arch) if p is not None]
        if predicates:
            text += f" [{'/'.join(predicates)}]"
        return text
