"""Unit tests for verspan.models.version module.

Test Coverage:
- Version grammar: epochs, release parts, pre/post/dev labels and separators
- Canonical rendering and repr
- Total order, including dev snapshots against pre-releases
- Agreement with ``packaging.version`` on a grid of PEP 440 versions
- Equality and hashing across zero-extended releases
- Wildcard / compatible-release upper bounds
"""

from __future__ import annotations

import itertools

import pytest
from packaging.version import Version as ReferenceVersion

from verspan.exceptions import InvalidSpecifier, InvalidVersionFormat
from verspan.models.version import (
    EndsAt,
    PreRelease,
    PreReleaseType,
    Version,
    compare_versions,
    ends_at_of,
    parse_version,
    sorted_versions,
    upper_for_wildcard,
)


@pytest.mark.unit
class TestParseVersion:
    """Tests for parse_version grammar."""

    def test_plain_release(self) -> None:
        version = parse_version("1.2.3")

        assert version.release == (1, 2, 3)
        assert version.epoch == 0
        assert version.pre is None
        assert version.post is None
        assert version.dev is None

    def test_full_version(self) -> None:
        version = parse_version("2!1.4rc1.post2.dev3")

        assert version.epoch == 2
        assert version.release == (1, 4)
        assert version.pre == PreRelease(PreReleaseType.RC, 1)
        assert version.post == 2
        assert version.dev == 3

    @pytest.mark.parametrize(
        "text,kind",
        [
            ("1.0a1", PreReleaseType.ALPHA),
            ("1.0alpha1", PreReleaseType.ALPHA),
            ("1.0b1", PreReleaseType.BETA),
            ("1.0beta1", PreReleaseType.BETA),
            ("1.0c1", PreReleaseType.RC),
            ("1.0rc1", PreReleaseType.RC),
            ("1.0pre1", PreReleaseType.RC),
            ("1.0preview1", PreReleaseType.RC),
        ],
    )
    def test_pre_release_labels(self, text: str, kind: PreReleaseType) -> None:
        assert parse_version(text).pre == PreRelease(kind, 1)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("v1.0", "1.0"),
            ("  1.0  ", "1.0"),
            ("1.0-beta.2", "1.0b2"),
            ("1.0_RC_3", "1.0rc3"),
            ("1.0.ALPHA", "1.0a0"),
            ("1.0-1", "1.0.post1"),
            ("1.0.rev", "1.0.post0"),
            ("1.0r5", "1.0.post5"),
            ("1.0-dev", "1.0.dev0"),
            ("1!2.0", "1!2.0"),
            ("0!2.0", "2.0"),
        ],
    )
    def test_normalizes_to_canonical_text(self, text: str, expected: str) -> None:
        assert str(parse_version(text)) == expected

    @pytest.mark.parametrize(
        "text",
        ["", "abc", "1.0.", ".1", "1..0", "1.0gamma", "1.0+local", "1.0 2"],
    )
    def test_invalid_versions_raise(self, text: str) -> None:
        with pytest.raises(InvalidVersionFormat) as exc_info:
            parse_version(text)

        assert exc_info.value.text == text

    def test_classmethod_parse(self) -> None:
        assert Version.parse("1.0") == parse_version("1.0")

    def test_large_numbers_are_unbounded(self) -> None:
        version = parse_version("1.99999999999999999999999")

        assert version.release[1] == 99999999999999999999999


@pytest.mark.unit
class TestVersionConstruction:
    """Tests for Version dataclass validation."""

    def test_empty_release_rejected(self) -> None:
        with pytest.raises(ValueError):
            Version(release=())

    def test_negative_parts_rejected(self) -> None:
        with pytest.raises(ValueError):
            Version(release=(1, -1))
        with pytest.raises(ValueError):
            Version(release=(1,), epoch=-1)

    def test_release_list_is_frozen_to_tuple(self) -> None:
        assert Version(release=[1, 2]).release == (1, 2)  # type: ignore[arg-type]

    def test_repr(self) -> None:
        assert repr(parse_version("1.0rc1")) == "<Version('1.0rc1')>"

    def test_properties(self) -> None:
        assert parse_version("1.0rc1").is_prerelease is True
        assert parse_version("1.0.dev0").is_prerelease is True
        assert parse_version("1.0.post1").is_prerelease is False
        assert parse_version("1.0.post1").is_postrelease is True
        assert parse_version("1.0.dev0").is_devrelease is True
        assert parse_version("1!2.0rc1.post1").base_version == "1!2.0"


@pytest.mark.unit
class TestOrdering:
    """Tests for compare_versions and the rich comparison operators."""

    def test_canonical_chain(self) -> None:
        chain = ["1.0.dev0", "1.0a1", "1.0b1", "1.0rc1", "1.0", "1.0.post1"]
        versions = [parse_version(text) for text in chain]

        for lower, higher in zip(versions, versions[1:]):
            assert lower < higher
            assert compare_versions(lower, higher) < 0
            assert compare_versions(higher, lower) > 0

    def test_post_dev_sorts_below_post(self) -> None:
        assert parse_version("1.0.post1.dev0") < parse_version("1.0.post1")

    def test_post_dev_sorts_above_release(self) -> None:
        """A dev build of a post-release still follows the release."""
        assert parse_version("1.0") < parse_version("1.0.post1.dev0")
        assert parse_version("1.0rc1") < parse_version("1.0.post1.dev0")

    def test_epoch_dominates(self) -> None:
        assert parse_version("1!0.1") > parse_version("2.0")

    def test_zero_extension(self) -> None:
        assert parse_version("1.0") == parse_version("1.0.0")
        assert compare_versions(parse_version("1"), parse_version("1.0.0")) == 0
        assert parse_version("1.0") < parse_version("1.0.1")

    def test_equal_versions_hash_equal(self) -> None:
        assert hash(parse_version("1.0")) == hash(parse_version("1.0.0"))
        assert len({parse_version("2"), parse_version("2.0"), parse_version("2.0.0")}) == 1

    def test_label_does_not_affect_equality(self) -> None:
        plain = Version(release=(1, 3, 0), dev=0)
        labelled = Version(release=(1, 3, 0), dev=0, label="1.3")

        assert plain == labelled
        assert hash(plain) == hash(labelled)

    def test_comparison_with_other_types(self) -> None:
        assert parse_version("1.0") != "1.0"
        with pytest.raises(TypeError):
            parse_version("1.0") < "2.0"  # noqa: B015

    def test_sorted_versions(self) -> None:
        texts = ["1.0", "1.0rc1", "0.9", "1.0.dev0", "1.0.post1"]

        result = [str(v) for v in sorted_versions(parse_version(t) for t in texts)]

        assert result == ["0.9", "1.0.dev0", "1.0rc1", "1.0", "1.0.post1"]
        assert [str(v) for v in sorted_versions([parse_version(t) for t in texts], reverse=True)] == list(
            reversed(result)
        )


REFERENCE_GRID = [
    "0.9",
    "1.0.dev0",
    "1.0.dev1",
    "1.0a0.dev0",
    "1.0a1",
    "1.0a1.post1",
    "1.0a2.dev0",
    "1.0b1",
    "1.0rc1",
    "1.0rc1.post1.dev0",
    "1.0",
    "1.0.0",
    "1.0.post1.dev0",
    "1.0.post1",
    "1.0.post2",
    "1.0.1",
    "1.1",
    "2.0",
    "1!0.1",
]


@pytest.mark.unit
class TestOrderingMatchesReference:
    """The version order agrees with ``packaging.version`` on PEP 440 input."""

    @pytest.mark.parametrize(
        "left,right",
        list(itertools.combinations(REFERENCE_GRID, 2)),
    )
    def test_pairwise_order(self, left: str, right: str) -> None:
        ours = compare_versions(parse_version(left), parse_version(right))
        ref_left, ref_right = ReferenceVersion(left), ReferenceVersion(right)
        expected = (ref_left > ref_right) - (ref_left < ref_right)

        assert (ours > 0) - (ours < 0) == expected

    def test_order_is_transitive(self) -> None:
        versions = [parse_version(text) for text in REFERENCE_GRID]
        for a, b, c in itertools.permutations(versions, 3):
            if a <= b and b <= c:
                assert a <= c


@pytest.mark.unit
class TestEndsAt:
    """Tests for ends_at_of."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1.2", EndsAt.RELEASE),
            ("1.2rc1", EndsAt.PRE_RELEASE),
            ("1.2.post1", EndsAt.POST_RELEASE),
            ("1.2rc1-3", EndsAt.POST_RELEASE),
        ],
    )
    def test_detects_last_segment(self, text: str, expected: EndsAt) -> None:
        assert ends_at_of(text) is expected

    def test_dev_segment_rejected(self) -> None:
        with pytest.raises(InvalidSpecifier):
            ends_at_of("1.2.dev1")


@pytest.mark.unit
class TestUpperForWildcard:
    """Tests for upper_for_wildcard."""

    def test_release(self) -> None:
        upper = upper_for_wildcard(parse_version("1.2"), EndsAt.RELEASE)

        assert upper == parse_version("1.3.0.dev0")
        assert upper.bound_text == "1.3"

    def test_release_drop_last(self) -> None:
        upper = upper_for_wildcard(parse_version("1.4.5"), EndsAt.RELEASE, drop_last=True)

        assert upper == parse_version("1.5.dev0")
        assert upper.bound_text == "1.5"

    def test_keeps_epoch(self) -> None:
        upper = upper_for_wildcard(parse_version("2!1.2"), EndsAt.RELEASE)

        assert upper.epoch == 2
        assert upper.bound_text == "2!1.3"

    def test_pre_release(self) -> None:
        upper = upper_for_wildcard(parse_version("1.0rc1"), EndsAt.PRE_RELEASE)

        assert upper == parse_version("1.0rc2.dev0")
        assert upper.bound_text == "1.0rc2"

    def test_post_release(self) -> None:
        upper = upper_for_wildcard(parse_version("1.0.post1"), EndsAt.POST_RELEASE)

        assert upper == parse_version("1.0.post2.dev0")

    def test_pre_release_drop_last_falls_back_to_release(self) -> None:
        upper = upper_for_wildcard(parse_version("1.0rc1"), EndsAt.PRE_RELEASE, drop_last=True)

        assert upper == parse_version("1.1.dev0")

    def test_post_release_drop_last_falls_back_to_pre_release(self) -> None:
        upper = upper_for_wildcard(
            parse_version("1.0rc1.post1"), EndsAt.POST_RELEASE, drop_last=True
        )

        assert upper == parse_version("1.0rc2.dev0")

    def test_post_release_drop_last_without_pre_falls_back_to_release(self) -> None:
        upper = upper_for_wildcard(parse_version("1.0.post1"), EndsAt.POST_RELEASE, drop_last=True)

        assert upper == parse_version("1.1.dev0")

    def test_drop_last_single_component_raises(self) -> None:
        with pytest.raises(ValueError):
            upper_for_wildcard(parse_version("1"), EndsAt.RELEASE, drop_last=True)

    def test_missing_segment_raises(self) -> None:
        with pytest.raises(ValueError):
            upper_for_wildcard(parse_version("1.0"), EndsAt.PRE_RELEASE)
        with pytest.raises(ValueError):
            upper_for_wildcard(parse_version("1.0"), EndsAt.POST_RELEASE)
