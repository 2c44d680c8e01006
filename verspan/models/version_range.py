"""
Interval algebra over versions.

A :class:`VersionRange` is a convex set of versions bounded by optional
inclusive or exclusive endpoints. This module provides the pairwise
operations the constraint layer is built from:

- :func:`intersect` — the overlap of two ranges, or ``None``
- :func:`complement` — zero, one or two ranges covering everything else
- :func:`compare_ranges` — a canonical total order used to deduplicate
  and sort ranges before export

The range order is deliberately separate from the version order in
:mod:`verspan.models.version`.

Range text uses ``[``/``(`` for an inclusive/exclusive lower bound and
``]``/``)`` for an inclusive/exclusive upper bound; an empty bound is
unbounded, e.g. ``[1.2,2.0)`` or ``(,)``.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from verspan.models.version import Version, compare_versions


@dataclass(frozen=True)
class VersionRange:
    """A contiguous, non-empty range of versions.

    Attributes:
        lower: Lower bound, or ``None`` if unbounded below.
        lower_inclusive: Whether ``lower`` itself is included.
        upper: Upper bound, or ``None`` if unbounded above.
        upper_inclusive: Whether ``upper`` itself is included.

    Raises:
        ValueError: The bounds describe an empty set.
    """

    lower: Optional[Version] = None
    lower_inclusive: bool = False
    upper: Optional[Version] = None
    upper_inclusive: bool = False

    def __post_init__(self) -> None:
        # An absent bound is never inclusive.
        if self.lower is None and self.lower_inclusive:
            object.__setattr__(self, "lower_inclusive", False)
        if self.upper is None and self.upper_inclusive:
            object.__setattr__(self, "upper_inclusive", False)
        if _is_empty(self.lower, self.lower_inclusive, self.upper, self.upper_inclusive):
            raise ValueError(f"Empty version range: {_render(self)}")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def unbounded(cls) -> "VersionRange":
        """The range containing every version."""
        return cls()

    @classmethod
    def exactly(cls, version: Version) -> "VersionRange":
        """The single-point range ``[version,version]``."""
        return cls(version, True, version, True)

    @classmethod
    def at_least(cls, version: Version, *, inclusive: bool = True) -> "VersionRange":
        return cls(lower=version, lower_inclusive=inclusive)

    @classmethod
    def at_most(cls, version: Version, *, inclusive: bool = True) -> "VersionRange":
        return cls(upper=version, upper_inclusive=inclusive)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_unbounded(self) -> bool:
        return self.lower is None and self.upper is None

    @property
    def is_bounded_below(self) -> bool:
        return self.lower is not None

    @property
    def is_bounded_above(self) -> bool:
        return self.upper is not None

    def contains(self, version: Version) -> bool:
        """Return True if ``version`` lies inside this range."""
        if self.lower is not None:
            cmp = compare_versions(version, self.lower)
            if cmp < 0 or (cmp == 0 and not self.lower_inclusive):
                return False
        if self.upper is not None:
            cmp = compare_versions(version, self.upper)
            if cmp > 0 or (cmp == 0 and not self.upper_inclusive):
                return False
        return True

    def __contains__(self, version: object) -> bool:
        return isinstance(version, Version) and self.contains(version)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def intersect(self, other: "VersionRange") -> Optional["VersionRange"]:
        return intersect(self, other)

    def complement(self) -> Tuple["VersionRange", ...]:
        return complement(self)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_range_text(self, *, exact: bool = False) -> str:
        """Render in range notation, e.g. ``[1.0,2.0)``.

        Derived wildcard bounds show their family label (``1.3``) unless
        ``exact`` is set, which spells out the real bound (``1.3.dev0``).
        """
        return _render(self, exact_lower=exact, exact_upper=exact)

    def to_allowed_text(self) -> str:
        """Render as the allowed range of an export.

        Only an exclusive upper bound keeps its family label; everywhere
        else a bare ``1.3`` would read as the final release.
        """
        return _render(self, exact_lower=True, exact_upper=self.upper_inclusive)

    def __str__(self) -> str:
        return _render(self)


def _bound_text(version: Optional[Version], exact: bool) -> str:
    if version is None:
        return ""
    return str(version) if exact else version.bound_text


def _render(r: VersionRange, *, exact_lower: bool = False, exact_upper: bool = False) -> str:
    opening = "[" if r.lower is not None and r.lower_inclusive else "("
    closing = "]" if r.upper is not None and r.upper_inclusive else ")"
    lower = _bound_text(r.lower, exact_lower)
    upper = _bound_text(r.upper, exact_upper)
    return f"{opening}{lower},{upper}{closing}"


def _is_empty(
    lower: Optional[Version],
    lower_inclusive: bool,
    upper: Optional[Version],
    upper_inclusive: bool,
) -> bool:
    if lower is None or upper is None:
        return False
    cmp = compare_versions(lower, upper)
    return cmp > 0 or (cmp == 0 and not (lower_inclusive and upper_inclusive))


def intersect(r1: VersionRange, r2: VersionRange) -> Optional[VersionRange]:
    """Return the overlap of two ranges, or ``None`` if they are disjoint."""
    if r1.lower is None:
        lower, lower_inclusive = r2.lower, r2.lower_inclusive
    elif r2.lower is None:
        lower, lower_inclusive = r1.lower, r1.lower_inclusive
    else:
        cmp = compare_versions(r1.lower, r2.lower)
        if cmp < 0:
            lower, lower_inclusive = r2.lower, r2.lower_inclusive
        elif cmp > 0:
            lower, lower_inclusive = r1.lower, r1.lower_inclusive
        else:
            lower = r1.lower
            lower_inclusive = r1.lower_inclusive and r2.lower_inclusive

    if r1.upper is None:
        upper, upper_inclusive = r2.upper, r2.upper_inclusive
    elif r2.upper is None:
        upper, upper_inclusive = r1.upper, r1.upper_inclusive
    else:
        cmp = compare_versions(r1.upper, r2.upper)
        if cmp < 0:
            upper, upper_inclusive = r1.upper, r1.upper_inclusive
        elif cmp > 0:
            upper, upper_inclusive = r2.upper, r2.upper_inclusive
        else:
            upper = r1.upper
            upper_inclusive = r1.upper_inclusive and r2.upper_inclusive

    if _is_empty(lower, lower_inclusive, upper, upper_inclusive):
        return None
    return VersionRange(lower, lower_inclusive, upper, upper_inclusive)


def complement(r: VersionRange) -> Tuple[VersionRange, ...]:
    """Return the ranges covering every version outside ``r``.

    The result holds no range for the unbounded range, one range for a
    range bounded on one side, and two for a range bounded on both.
    """
    if r.lower is None:
        if r.upper is None:
            return ()
        return (VersionRange(lower=r.upper, lower_inclusive=not r.upper_inclusive),)
    if r.upper is None:
        return (VersionRange(upper=r.lower, upper_inclusive=not r.lower_inclusive),)
    return (
        VersionRange(upper=r.lower, upper_inclusive=not r.lower_inclusive),
        VersionRange(lower=r.upper, lower_inclusive=not r.upper_inclusive),
    )


def compare_ranges(r1: VersionRange, r2: VersionRange) -> int:
    """Canonical order over ranges.

    Lower bounds first: a present bound sorts before an absent one, and
    on equal versions inclusive sorts before exclusive. Then upper
    bounds: an absent bound sorts before a present one, and on equal
    versions exclusive sorts before inclusive.
    """
    if r1.lower is not None and r2.lower is not None:
        cmp = compare_versions(r1.lower, r2.lower)
        if cmp != 0:
            return cmp
        if r1.lower_inclusive != r2.lower_inclusive:
            return -1 if r1.lower_inclusive else 1
    elif r1.lower is not None:
        return -1
    elif r2.lower is not None:
        return 1

    if r1.upper is not None and r2.upper is not None:
        cmp = compare_versions(r1.upper, r2.upper)
        if cmp != 0:
            return cmp
        if r1.upper_inclusive != r2.upper_inclusive:
            return 1 if r1.upper_inclusive else -1
    elif r1.upper is not None:
        return 1
    elif r2.upper is not None:
        return -1

    return 0


#: Sort key implementing :func:`compare_ranges`.
range_sort_key = functools.cmp_to_key(compare_ranges)


def canonical_ranges(ranges: Iterable[VersionRange]) -> List[VersionRange]:
    """Sort ``ranges`` canonically and drop duplicates."""
    result: List[VersionRange] = []
    for r in sorted(ranges, key=range_sort_key):
        if not result or compare_ranges(result[-1], r) != 0:
            result.append(r)
    return result
