"""
Constraint sets: unions of version ranges parsed from specifiers.

A :class:`ConstraintSet` represents "every version satisfying this
specifier" as a union of :class:`~verspan.models.version_range.VersionRange`
values. The empty set matches nothing; a set holding the unbounded range
matches everything.

Specifier terms are comma-joined and combined with AND::

    >>> ConstraintSet.parse(">=1.0,<2.0").export().allowed_text
    '[1.0,2.0)'
    >>> ConstraintSet.parse("!=1.5").export().reject_texts
    ('[1.5,1.5]',)

Host resolvers only understand a single allowed range plus excluded
sub-ranges, so :meth:`ConstraintSet.export` computes that form from the
complement and verifies it describes exactly the same set.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from verspan.exceptions import (
    InvalidSpecifier,
    UnrepresentableConstraintSet,
)
from verspan.models.version import (
    Version,
    ends_at_of,
    parse_version,
    upper_for_wildcard,
)
from verspan.models.version_range import (
    VersionRange,
    canonical_ranges,
    complement,
    intersect,
    range_sort_key,
)
from verspan.constants import (
    SPECIFIER_OPERATORS,
    SPECIFIER_SEPARATOR,
    WILDCARD_SUFFIX,
)

# ---------------------------------------------------------------------------
# Specifier terms
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Single:
    """A term satisfied by exactly one range."""

    range: VersionRange


@dataclass(frozen=True)
class _AnyOf:
    """A term satisfied by any of several disjoint ranges."""

    options: Tuple[VersionRange, ...]


_Term = Union[_Single, _AnyOf]


def _combine(terms: Sequence[_Term]) -> Tuple[VersionRange, ...]:
    """AND-fold terms into the ranges of their conjunction."""
    if not terms:
        return (VersionRange.unbounded(),)

    current: List[VersionRange] = []
    for index, term in enumerate(terms):
        options = (term.range,) if isinstance(term, _Single) else term.options
        if index == 0:
            current = list(options)
            continue

        combined: List[VersionRange] = []
        for option in options:
            for existing in current:
                overlap = intersect(existing, option)
                if overlap is not None:
                    combined.append(overlap)
        current = combined
        if not current:
            break

    return tuple(current)


def _split_wildcard(operand: str) -> Tuple[str, bool]:
    if operand.endswith(WILDCARD_SUFFIX):
        return operand[: -len(WILDCARD_SUFFIX)].strip(), True
    return operand, False


def _parse_term(term: str) -> _Term:
    """Translate one specifier term into its range(s)."""
    for operator in SPECIFIER_OPERATORS:
        if term.startswith(operator):
            operand = term[len(operator) :].strip()
            break
    else:
        raise InvalidSpecifier(f"Invalid constraint: {term!r}", text=term)

    if not operand:
        raise InvalidSpecifier(f"Missing version in constraint: {term!r}", text=term)

    if operator == "===":
        return _Single(VersionRange.exactly(parse_version(operand)))

    if operator == "==":
        operand, wildcard = _split_wildcard(operand)
        lower = parse_version(operand)
        if not wildcard:
            return _Single(VersionRange.exactly(lower))
        upper = upper_for_wildcard(lower, ends_at_of(operand))
        return _Single(VersionRange(lower, True, upper, False))

    if operator == "~=":
        ends_at = ends_at_of(operand)
        lower = parse_version(operand)
        try:
            upper = upper_for_wildcard(lower, ends_at, drop_last=True)
        except ValueError as exc:
            raise InvalidSpecifier(
                f"Compatible release needs at least two release parts: {term!r}",
                text=term,
            ) from exc
        return _Single(VersionRange(lower, True, upper, False))

    if operator == "!=":
        operand, wildcard = _split_wildcard(operand)
        excluded = parse_version(operand)
        if not wildcard:
            return _AnyOf(
                (
                    VersionRange.at_most(excluded, inclusive=False),
                    VersionRange.at_least(excluded, inclusive=False),
                )
            )
        upper = upper_for_wildcard(excluded, ends_at_of(operand))
        return _AnyOf(
            (
                VersionRange.at_most(excluded, inclusive=False),
                VersionRange.at_least(upper, inclusive=True),
            )
        )

    version = parse_version(operand)
    if operator == ">=":
        return _Single(VersionRange.at_least(version, inclusive=True))
    if operator == "<=":
        return _Single(VersionRange.at_most(version, inclusive=True))
    if operator == ">":
        return _Single(VersionRange.at_least(version, inclusive=False))
    return _Single(VersionRange.at_most(version, inclusive=False))


# ---------------------------------------------------------------------------
# Export form
# ---------------------------------------------------------------------------


class MatchSentinel(Enum):
    """Export outcomes that need no range text."""

    ALWAYS_MATCH = "always-match"
    NEVER_MATCH = "never-match"

    def to_json(self) -> Dict[str, Any]:
        return {"kind": self.value}


ALWAYS_MATCH = MatchSentinel.ALWAYS_MATCH
NEVER_MATCH = MatchSentinel.NEVER_MATCH


@dataclass(frozen=True)
class RangeExport:
    """A single allowed range with excluded sub-ranges.

    Attributes:
        allowed: The one contiguous range versions must fall in.
        rejects: Ranges inside ``allowed`` that are excluded, in
            canonical order.
    """

    allowed: VersionRange
    rejects: Tuple[VersionRange, ...] = ()

    @property
    def allowed_text(self) -> str:
        return self.allowed.to_allowed_text()

    @property
    def reject_texts(self) -> Tuple[str, ...]:
        return tuple(r.to_range_text(exact=True) for r in self.rejects)

    def to_constraint_set(self) -> "ConstraintSet":
        """Rebuild the set of versions this export admits."""
        terms: List[_Term] = [_Single(self.allowed)]
        terms.extend(_AnyOf(complement(r)) for r in self.rejects)
        return ConstraintSet(_combine(terms))

    def to_json(self) -> Dict[str, Any]:
        return {
            "kind": "range",
            "allowed": self.allowed_text,
            "rejects": list(self.reject_texts),
        }


ExportResult = Union[RangeExport, MatchSentinel]


# ---------------------------------------------------------------------------
# Constraint set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConstraintSet:
    """Union of version ranges satisfying a specifier.

    Attributes:
        ranges: Member ranges; empty means nothing matches.
    """

    ranges: Tuple[VersionRange, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "ranges", tuple(self.ranges))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "ConstraintSet":
        """Parse a comma-joined specifier such as ``">=1.0,!=1.5,<2"``.

        Blank text matches every version. A self-contradictory specifier
        yields the empty set rather than an error.

        Raises:
            InvalidSpecifier: A term is empty or uses an unknown operator.
            InvalidVersionFormat: A term's version is malformed.
        """
        if not text.strip():
            return cls.universal()
        terms = [_parse_term(part.strip()) for part in text.split(SPECIFIER_SEPARATOR)]
        return cls(_combine(terms))

    @classmethod
    def universal(cls) -> "ConstraintSet":
        return cls((VersionRange.unbounded(),))

    @classmethod
    def empty(cls) -> "ConstraintSet":
        return cls(())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.ranges

    @property
    def is_universal(self) -> bool:
        return any(r.is_unbounded for r in self.ranges)

    def contains(self, version: Union[Version, str]) -> bool:
        """Return True if ``version`` satisfies this constraint set."""
        if isinstance(version, str):
            version = parse_version(version)
        return any(r.contains(version) for r in self.ranges)

    def __contains__(self, version: object) -> bool:
        return isinstance(version, (Version, str)) and self.contains(version)

    def filter(self, versions: Iterable[Version]) -> List[Version]:
        """Return the members of ``versions`` this set admits, in order."""
        return [v for v in versions if self.contains(v)]

    def overlaps(self, other: "ConstraintSet") -> bool:
        """Return True if some version satisfies both sets."""
        return any(
            intersect(mine, theirs) is not None
            for mine in self.ranges
            for theirs in other.ranges
        )

    def is_subset(self, other: "ConstraintSet") -> bool:
        return self.intersection(other.complement()).is_empty

    def is_equivalent(self, other: "ConstraintSet") -> bool:
        """Return True if both sets admit exactly the same versions."""
        return self.is_subset(other) and other.is_subset(self)

    # ------------------------------------------------------------------
    # Set algebra
    # ------------------------------------------------------------------

    def intersection(self, other: "ConstraintSet") -> "ConstraintSet":
        return ConstraintSet(_combine([_AnyOf(self.ranges), _AnyOf(other.ranges)]))

    def complement(self) -> "ConstraintSet":
        """Return the set of versions *not* admitted (De Morgan)."""
        if self.is_empty:
            return ConstraintSet.universal()
        return ConstraintSet(_combine([_AnyOf(complement(r)) for r in self.ranges]))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, *, widen: bool = False) -> ExportResult:
        """Convert to the single-range-plus-rejects form.

        Args:
            widen: When the allowed versions form several disjoint
                intervals, keep the least restrictive outer bounds
                instead of raising.

        Returns:
            ``NEVER_MATCH`` for the empty set, ``ALWAYS_MATCH`` for the
            universal set, otherwise a :class:`RangeExport`.

        Raises:
            UnrepresentableConstraintSet: The set cannot be expressed as
                one allowed range with rejects and ``widen`` is False.
        """
        if self.is_empty:
            return NEVER_MATCH

        remainder = self.complement()
        if remainder.is_empty:
            return ALWAYS_MATCH
        if remainder.is_universal:
            return NEVER_MATCH

        below = [r for r in remainder.ranges if r.lower is None]
        above = [r for r in remainder.ranges if r.lower is not None and r.upper is None]
        inside = [r for r in remainder.ranges if r.lower is not None and r.upper is not None]

        if (len(below) > 1 or len(above) > 1) and not widen:
            raise UnrepresentableConstraintSet(
                "Constraint set allows several disjoint ranges",
                constraint=str(self),
            )

        lower: Optional[Version] = None
        lower_inclusive = False
        if below:
            fragment = min(below, key=range_sort_key)
            lower, lower_inclusive = fragment.upper, not fragment.upper_inclusive

        upper: Optional[Version] = None
        upper_inclusive = False
        if above:
            fragment = max(above, key=range_sort_key)
            upper, upper_inclusive = fragment.lower, not fragment.lower_inclusive

        try:
            allowed = VersionRange(lower, lower_inclusive, upper, upper_inclusive)
        except ValueError as exc:
            raise UnrepresentableConstraintSet(
                "Constraint set has no contiguous allowed range",
                constraint=str(self),
            ) from exc

        result = RangeExport(allowed, tuple(canonical_ranges(inside)))
        if not widen and not result.to_constraint_set().is_equivalent(self):
            raise UnrepresentableConstraintSet(
                "Export form does not match the constraint set",
                constraint=str(self),
            )
        return result

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        if self.is_empty:
            return "<empty>"
        return " | ".join(r.to_range_text() for r in canonical_ranges(self.ranges))
