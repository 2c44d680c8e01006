"""Resolver-facing view of already-decoded package metadata.

Fetching and decoding index metadata is left to the caller; this module
takes the resulting plain data (a version listing, ``requires_dist``
lines) and produces what a dependency-resolution engine consumes:

- version listings parsed and sorted by version order
- per-dependency constraints in the single-range-plus-rejects export
  form, tagged with their environment predicates

Typical usage::

    resolver = ConstraintResolver(config)
    versions = resolver.sort_versions(listing)
    for dep in resolver.dependency_constraints(requires_dist):
        print(dep.name, dep.os, dep.arch, dep.export)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from verspan.config import VerspanConfig
from verspan.core.parser import RequirementParser
from verspan.models.constraint import ConstraintSet, ExportResult
from verspan.models.environment import tag_matches
from verspan.models.version import Version, parse_version, sorted_versions
from verspan.exceptions import InvalidVersionFormat, UnrepresentableConstraintSet
from verspan.utils.logger import get_logger

logger = get_logger("resolver")


@dataclass(frozen=True)
class DependencyConstraint:
    """One dependency edge as handed to the resolution engine.

    Attributes:
        name: Dependency package name.
        os: Operating-system predicate, or ``None`` for every OS.
        arch: Architecture predicate, or ``None`` for every architecture.
        export: Allowed range plus rejects, or a match sentinel.
    """

    name: str
    os: Optional[str]
    arch: Optional[str]
    export: ExportResult

    def applies_to(self, os: Optional[str], arch: Optional[str]) -> bool:
        """Check whether this edge applies to a target environment."""
        return tag_matches(self.os, os) and tag_matches(self.arch, arch)

    def to_json(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {"name": self.name}
        if self.os is not None:
            entry["os"] = self.os
        if self.arch is not None:
            entry["arch"] = self.arch
        entry["export"] = self.export.to_json()
        return entry


class ConstraintResolver:
    """Turn version listings and dependency lines into resolver input.

    Args:
        config: Settings controlling invalid listings and widening.
        parser: Requirement parser; a default one is created if omitted.
    """

    def __init__(
        self,
        config: Optional[VerspanConfig] = None,
        *,
        parser: Optional[RequirementParser] = None,
    ) -> None:
        self.config = config or VerspanConfig()
        self.parser = parser or RequirementParser()

    # ------------------------------------------------------------------
    # Version listings
    # ------------------------------------------------------------------

    def sort_versions(self, listing: Iterable[str]) -> List[Version]:
        """Parse a version listing and sort it ascending.

        Raises:
            InvalidVersionFormat: An entry is malformed and
                ``skip_invalid_versions`` is disabled.
        """
        parsed: List[Version] = []
        for text in listing:
            try:
                parsed.append(parse_version(text))
            except InvalidVersionFormat:
                if not self.config.skip_invalid_versions:
                    raise
                logger.warning("Skipping unparseable version %r", text)
        return sorted_versions(parsed)

    def matching_versions(self, specifier: str, listing: Iterable[str]) -> List[Version]:
        """Return the sorted members of ``listing`` satisfying ``specifier``."""
        constraint = ConstraintSet.parse(specifier)
        return constraint.filter(self.sort_versions(listing))

    # ------------------------------------------------------------------
    # Dependencies
    # ------------------------------------------------------------------

    def dependency_constraints(self, requires_dist: Iterable[str]) -> List[DependencyConstraint]:
        """Export every applicable, understood dependency line.

        Lines guarded by ``extra`` markers are skipped, as are lines whose
        environment predicates name an unknown OS or architecture.

        Raises:
            ParseError: A line is malformed.
            UnrepresentableConstraintSet: A constraint cannot be exported
                and ``widen_unrepresentable`` is disabled.
        """
        constraints: List[DependencyConstraint] = []
        for requirement in self.parser.parse_lines(requires_dist):
            if not requirement.applicable:
                logger.debug("Skipping %s: not installed by default", requirement.name)
                continue
            if not requirement.is_understood():
                logger.info(
                    "Skipping %s: unsupported environment (os=%s, arch=%s)",
                    requirement.name,
                    requirement.os,
                    requirement.arch,
                )
                continue

            try:
                export = requirement.export(widen=self.config.widen_unrepresentable)
            except UnrepresentableConstraintSet as exc:
                exc.details["package"] = requirement.name
                raise

            logger.debug("%s -> %s", requirement.name, export)
            constraints.append(
                DependencyConstraint(
                    name=requirement.name,
                    os=requirement.os,
                    arch=requirement.arch,
                    export=export,
                )
            )
        return constraints
