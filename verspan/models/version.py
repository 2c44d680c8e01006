"""
Version model for verspan.

This module parses package version strings into structured, immutable
:class:`Version` values and defines their total order.

Supported grammar (case-insensitive, surrounding whitespace ignored)::

    [v][N!]N(.N)*[{a|alpha|b|beta|c|rc|pre|preview}[N]][-N | {post|rev|r}[N]][dev[N]]

Pre-release, post-release and dev labels may be separated from their
neighbours with ``-``, ``_`` or ``.``; a label without a number means 0.

Ordering, after epoch and release (shorter releases are zero-extended):

1. A release without a pre-release sorts above any pre-release, except
   a plain dev snapshot (``1.0.dev0``), which sorts below every
   pre-release of the same release.
2. Pre-releases order ``alpha < beta < rc``, then by number.
3. A post-release sorts above no post-release, then by number.
4. A dev-release sorts below no dev-release, then by number.

Example:
    >>> parse_version("1.0rc1") < parse_version("1.0")
    True
    >>> str(parse_version("v1.0-beta.2"))
    '1.0b2'
"""

from __future__ import annotations

import re
import functools
from enum import Enum, IntEnum
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from verspan.exceptions import InvalidSpecifier, InvalidVersionFormat

VERSION_PATTERN = r"""
    v?
    (?:(?P<epoch>[0-9]+)!)?
    (?P<release>[0-9]+(?:\.[0-9]+)*)
    (?P<pre>
        [-_.]?
        (?P<pre_l>alpha|a|beta|b|preview|pre|c|rc)
        [-_.]?
        (?P<pre_n>[0-9]+)?
    )?
    (?P<post>
        (?:-(?P<post_n1>[0-9]+))
        |
        (?:[-_.]?(?P<post_l>post|rev|r)[-_.]?(?P<post_n2>[0-9]+)?)
    )?
    (?P<dev>
        [-_.]?
        (?P<dev_l>dev)
        [-_.]?
        (?P<dev_n>[0-9]+)?
    )?
"""

_VERSION_RE = re.compile(VERSION_PATTERN, re.VERBOSE | re.IGNORECASE)


class PreReleaseType(IntEnum):
    """Pre-release phases, in ascending order."""

    ALPHA = 0
    BETA = 1
    RC = 2

    @property
    def identifier(self) -> str:
        """Canonical short label used in version text."""
        return _PRE_RELEASE_IDENTIFIERS[self]


_PRE_RELEASE_IDENTIFIERS = {
    PreReleaseType.ALPHA: "a",
    PreReleaseType.BETA: "b",
    PreReleaseType.RC: "rc",
}

_PRE_RELEASE_LABELS = {
    "alpha": PreReleaseType.ALPHA,
    "a": PreReleaseType.ALPHA,
    "beta": PreReleaseType.BETA,
    "b": PreReleaseType.BETA,
    "preview": PreReleaseType.RC,
    "pre": PreReleaseType.RC,
    "c": PreReleaseType.RC,
    "rc": PreReleaseType.RC,
}


@dataclass(frozen=True)
class PreRelease:
    """A pre-release segment such as ``rc2``."""

    kind: PreReleaseType
    number: int = 0

    def __str__(self) -> str:
        return f"{self.kind.identifier}{self.number}"


class EndsAt(Enum):
    """Last segment present in the text of a wildcard or ``~=`` operand."""

    RELEASE = "release"
    PRE_RELEASE = "pre-release"
    POST_RELEASE = "post-release"


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """Structured, immutable, totally-ordered version value.

    Equality follows the version order, so ``1.0 == 1.0.0``.

    Attributes:
        release: Release components, at least one.
        epoch: Version epoch (``N!`` prefix), default 0.
        pre: Optional pre-release segment.
        post: Optional post-release number.
        dev: Optional dev-release number.
        label: Display text for derived wildcard bounds (``1.3`` for the
            exclusive upper bound of ``==1.2.*``). Not part of equality.
    """

    release: Tuple[int, ...]
    epoch: int = 0
    pre: Optional[PreRelease] = None
    post: Optional[int] = None
    dev: Optional[int] = None
    label: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        release = tuple(self.release)
        if not release:
            raise ValueError("A version needs at least one release component")
        if any(part < 0 for part in release):
            raise ValueError(f"Release components must be non-negative: {release}")
        if self.epoch < 0:
            raise ValueError(f"Epoch must be non-negative: {self.epoch}")
        object.__setattr__(self, "release", release)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse ``text`` into a :class:`Version`.

        Raises:
            InvalidVersionFormat: ``text`` does not match the grammar.
        """
        return parse_version(text)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def is_prerelease(self) -> bool:
        """True for pre-releases and dev-releases."""
        return self.pre is not None or self.dev is not None

    @property
    def is_postrelease(self) -> bool:
        return self.post is not None

    @property
    def is_devrelease(self) -> bool:
        return self.dev is not None

    @property
    def base_version(self) -> str:
        """Epoch and release only, e.g. ``1!2.0``."""
        return _format(self.epoch, self.release, None, None, None)

    # ------------------------------------------------------------------
    # Ordering & hashing
    # ------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) == 0

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) < 0

    def __hash__(self) -> int:
        release = list(self.release)
        while len(release) > 1 and release[-1] == 0:
            release.pop()
        return hash((self.epoch, tuple(release), self.pre, self.post, self.dev))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return _format(self.epoch, self.release, self.pre, self.post, self.dev)

    def __repr__(self) -> str:
        return f"<Version({str(self)!r})>"

    @property
    def bound_text(self) -> str:
        """Text used when this version appears as a range bound."""
        return self.label if self.label is not None else str(self)


def _format(
    epoch: int,
    release: Sequence[int],
    pre: Optional[PreRelease],
    post: Optional[int],
    dev: Optional[int],
) -> str:
    parts = []
    if epoch != 0:
        parts.append(f"{epoch}!")
    parts.append(".".join(str(part) for part in release))
    if pre is not None:
        parts.append(str(pre))
    if post is not None:
        parts.append(f".post{post}")
    if dev is not None:
        parts.append(f".dev{dev}")
    return "".join(parts)


def _match(text: str) -> "re.Match[str]":
    match = _VERSION_RE.fullmatch(text.strip())
    if match is None:
        raise InvalidVersionFormat(f"Invalid version: {text!r}", text=text)
    return match


def _number(value: Optional[str]) -> int:
    return int(value) if value else 0


def parse_version(text: str) -> Version:
    """Parse a version string.

    Args:
        text: Version text, e.g. ``"1.0"``, ``"v2!1.4rc1.post2.dev3"``.

    Returns:
        The parsed :class:`Version`.

    Raises:
        InvalidVersionFormat: ``text`` does not match the version grammar.
    """
    match = _match(text)

    pre: Optional[PreRelease] = None
    if match.group("pre_l"):
        pre = PreRelease(
            _PRE_RELEASE_LABELS[match.group("pre_l").lower()],
            _number(match.group("pre_n")),
        )

    post: Optional[int] = None
    if match.group("post_n1"):
        post = int(match.group("post_n1"))
    elif match.group("post_l"):
        post = _number(match.group("post_n2"))

    dev: Optional[int] = None
    if match.group("dev_l"):
        dev = _number(match.group("dev_n"))

    return Version(
        release=tuple(int(part) for part in match.group("release").split(".")),
        epoch=_number(match.group("epoch")),
        pre=pre,
        post=post,
        dev=dev,
    )


def _sign(left: int, right: int) -> int:
    return (left > right) - (left < right)


def compare_versions(a: Version, b: Version) -> int:
    """Compare two versions.

    Returns:
        A negative number if ``a < b``, zero if equal, positive if ``a > b``.
    """
    if a.epoch != b.epoch:
        return _sign(a.epoch, b.epoch)

    for index in range(max(len(a.release), len(b.release))):
        left = a.release[index] if index < len(a.release) else 0
        right = b.release[index] if index < len(b.release) else 0
        if left != right:
            return _sign(left, right)

    if a.pre is None and b.pre is not None:
        return -1 if _is_dev_snapshot(a) else 1
    if a.pre is not None:
        if b.pre is None:
            return 1 if _is_dev_snapshot(b) else -1
        if a.pre.kind != b.pre.kind:
            return _sign(a.pre.kind, b.pre.kind)
        if a.pre.number != b.pre.number:
            return _sign(a.pre.number, b.pre.number)

    if a.post is not None and b.post is None:
        return 1
    if b.post is not None:
        if a.post is None:
            return -1
        if a.post != b.post:
            return _sign(a.post, b.post)

    if a.dev is not None and b.dev is None:
        return -1
    if b.dev is not None:
        if a.dev is None:
            return 1
        if a.dev != b.dev:
            return _sign(a.dev, b.dev)

    return 0


def _is_dev_snapshot(version: Version) -> bool:
    # A dev build of the release itself; ``.postN.devM`` builds follow the
    # post-release instead.
    return version.dev is not None and version.post is None


def sorted_versions(versions: Iterable[Version], *, reverse: bool = False) -> List[Version]:
    """Return ``versions`` sorted by version order."""
    return sorted(versions, key=functools.cmp_to_key(compare_versions), reverse=reverse)


# ---------------------------------------------------------------------------
# Wildcard / compatible-release bounds
# ---------------------------------------------------------------------------


def ends_at_of(text: str) -> EndsAt:
    """Report the last segment present in a wildcard or ``~=`` operand.

    Raises:
        InvalidVersionFormat: ``text`` is not a version.
        InvalidSpecifier: ``text`` carries a dev segment, which cannot be
            combined with wildcard or compatible-release operators.
    """
    match = _match(text)
    if match.group("dev_l"):
        raise InvalidSpecifier(
            f"Cannot use dev releases with wildcard constraints: {text!r}",
            text=text,
        )
    if match.group("post_n1") or match.group("post_l"):
        return EndsAt.POST_RELEASE
    if match.group("pre_l"):
        return EndsAt.PRE_RELEASE
    return EndsAt.RELEASE


def upper_for_wildcard(
    version: Version,
    ends_at: EndsAt,
    drop_last: bool = False,
) -> Version:
    """Compute the exclusive upper bound of a wildcard family.

    ``==1.2.*`` covers everything below ``1.3.dev0``; ``~=1.4.5`` (with
    ``drop_last``) covers everything below ``1.5.dev0``. The returned
    version always carries ``dev=0`` and a display label naming the
    incremented family.

    Args:
        version: The parsed operand.
        ends_at: Last segment present in the operand's text.
        drop_last: Increment one release component further left, as
            ``~=`` does. Pre- and post-release operands fall back one
            phase instead.

    Raises:
        ValueError: ``drop_last`` on a single-component release, or
            ``ends_at`` names a segment ``version`` does not have.
    """
    if drop_last and ends_at is EndsAt.PRE_RELEASE:
        ends_at, drop_last = EndsAt.RELEASE, False
    elif drop_last and ends_at is EndsAt.POST_RELEASE:
        ends_at = EndsAt.RELEASE if version.pre is None else EndsAt.PRE_RELEASE
        drop_last = False

    if ends_at is EndsAt.RELEASE:
        keep = len(version.release) - (2 if drop_last else 1)
        if keep < 0:
            raise ValueError(
                "Cannot drop last part of release when only one part exists"
            )
        family = version.release[:keep] + (version.release[keep] + 1,)
        return Version(
            release=family + (0,),
            epoch=version.epoch,
            dev=0,
            label=_format(version.epoch, family, None, None, None),
        )

    if ends_at is EndsAt.PRE_RELEASE:
        if version.pre is None:
            raise ValueError(f"{version} has no pre-release segment")
        pre = PreRelease(version.pre.kind, version.pre.number + 1)
        return Version(
            release=version.release,
            epoch=version.epoch,
            pre=pre,
            dev=0,
            label=_format(version.epoch, version.release, pre, None, None),
        )

    if version.post is None:
        raise ValueError(f"{version} has no post-release segment")
    post = version.post + 1
    return Version(
        release=version.release,
        epoch=version.epoch,
        pre=version.pre,
        post=post,
        dev=0,
        label=_format(version.epoch, version.release, version.pre, post, None),
    )
