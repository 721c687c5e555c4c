"""
Tests for moddeps.versioning module.

Tests version ordering including:
- Tokenization of version strings
- Numeric, alphabetic and missing token comparison
- Special qualifier ordering
- DependencyVersion value semantics
- PlatformVersion parsing and rendering
"""

from __future__ import annotations

import itertools

import pytest

from moddeps.versioning import (
    DependencyVersion,
    PlatformVersion,
    compare_tokens,
    compare_versions,
    version_tokens,
)


def sign(n: int) -> int:
    return (n > 0) - (n < 0)


class TestVersionTokens:
    """Tests for version string tokenization."""

    def test_numbers_and_letters(self):
        """Test that digit and letter runs become tokens."""
        assert version_tokens("1.2.1-mc1.7.10-alpha+build.1123") == (
            1, 2, 1, "mc", 1, 7, 10, "alpha", "build", 1123,
        )

    def test_separators_dropped(self):
        """Test that separators are not represented."""
        assert version_tokens("2.1.2") == version_tokens("2-1-2") == (2, 1, 2)

    def test_letters_and_digits_split(self):
        """Test that a letter/digit boundary splits a token."""
        assert version_tokens("1rc2") == (1, "rc", 2)

    def test_surrounding_whitespace_ignored(self):
        """Test that the string is trimmed before tokenizing."""
        assert version_tokens("  1.0 ") == (1, 0)

    def test_empty(self):
        """Test that an empty string has no tokens."""
        assert version_tokens("") == ()


class TestCompareVersions:
    """Tests for the version comparator."""

    def test_separator_insensitive(self):
        """Test that separators do not affect comparison."""
        assert compare_versions("2.1.2", "2-1-2") == 0

    def test_numeric(self):
        """Test numeric component ordering."""
        assert compare_versions("1.2.1", "1.2.0") > 0
        assert compare_versions("1.1.2", "1.2.1") < 0
        assert compare_versions("2.1.2", "1.2.2") > 0
        assert compare_versions("1.10", "1.9") > 0

    def test_letters_case_sensitive(self):
        """Test ordinary letter tokens compare by character code."""
        assert compare_versions("a", "A") > 0
        assert compare_versions("a", "b") < 0
        assert compare_versions("aa", "a") > 0

    @pytest.mark.parametrize(
        "lower, higher",
        [
            ("rc", "snapshot"),
            ("snapshot", "final"),
            ("final", "ga"),
            ("ga", "release"),
            ("release", "sp"),
            ("dev", "rc"),
        ],
    )
    def test_special_qualifier_order(self, lower, higher):
        """Test the fixed order of special qualifiers."""
        assert compare_versions(lower, higher) < 0
        assert compare_versions(higher, lower) > 0

    def test_special_qualifiers_case_insensitive(self):
        """Test that special qualifiers ignore case."""
        assert compare_versions("rc", "RC") == 0
        assert compare_versions("1.0-Final", "1.0-final") == 0

    def test_special_vs_ordinary_letters(self):
        """Test that specials other than dev outrank ordinary words."""
        assert compare_versions("rc", "beta") > 0
        assert compare_versions("beta", "rc") < 0
        assert compare_versions("sp", "zzz") > 0

    def test_dev_ranks_lowest(self):
        """Test that dev is below ordinary words."""
        assert compare_versions("dev", "alpha") < 0
        assert compare_versions("alpha", "dev") > 0
        assert compare_versions("1.0-dev", "1.0-a") < 0

    def test_numeric_beats_letters(self):
        """Test that a number outranks a word at the same position."""
        assert compare_versions("1.1.1", "1.a.1") > 0
        assert compare_versions("a.1.1", "1.1.a") < 0

    def test_extra_trailing_tokens(self):
        """Test that extra numbers win and extra words lose."""
        assert compare_versions("1.1.1", "1.1.1.1") < 0
        assert compare_versions("1.1.1", "1.1.1.a") > 0
        assert compare_versions("1.0", "1.0-alpha") > 0

    def test_result_is_normalized(self):
        """Test that compare_versions returns -1, 0 or 1."""
        assert compare_versions("10", "1") == 1
        assert compare_versions("1", "10") == -1

    def test_antisymmetric_and_transitive(self):
        """Test comparator consistency over a mixed sample."""
        sample = [
            "1.0", "1.0.0", "1.0-rc", "1.0-RC1", "1.0-dev", "1.0-alpha",
            "1.0-beta", "1.0-snapshot", "1.0-sp", "1.0.1", "1.a", "a.1",
            "2-0", "1.0-final", "1.0-ga", "1.0-release", "",
        ]
        for a, b in itertools.product(sample, repeat=2):
            assert sign(compare_versions(a, b)) == -sign(compare_versions(b, a))
        for a, b, c in itertools.product(sample, repeat=3):
            if compare_versions(a, b) <= 0 and compare_versions(b, c) <= 0:
                assert compare_versions(a, c) <= 0


class TestDependencyVersion:
    """Tests for the DependencyVersion value type."""

    def test_tokens(self):
        """Test that tokens are derived from raw."""
        assert DependencyVersion("-1.0.1-alpha").tokens == (1, 0, 1, "alpha")

    def test_equality_ignores_separators(self):
        """Test equality follows the comparator."""
        assert DependencyVersion("2.1.2") == DependencyVersion("2-1-2")
        assert hash(DependencyVersion("2.1.2")) == hash(DependencyVersion("2-1-2"))

    def test_equal_specials_hash_equal(self):
        """Test hashing is consistent with case-insensitive specials."""
        assert DependencyVersion("1-RC") == DependencyVersion("1-rc")
        assert hash(DependencyVersion("1-RC")) == hash(DependencyVersion("1-rc"))

    def test_ordering(self):
        """Test rich comparisons."""
        assert DependencyVersion("1.2.1") > DependencyVersion("1.2.0")
        assert DependencyVersion("1.0-rc") < DependencyVersion("1.0")
        assert DependencyVersion("1.0") >= DependencyVersion("1-0")

    def test_compare_tokens_matches(self):
        """Test compare() agrees with compare_tokens()."""
        a, b = DependencyVersion("1.1"), DependencyVersion("1.1.a")
        assert a.compare(b) == compare_tokens(a.tokens, b.tokens)
        assert a.compare(b) > 0


class TestPlatformVersion:
    """Tests for PlatformVersion."""

    def test_parse(self):
        """Test parsing full and short versions."""
        assert PlatformVersion.parse("1.20.4") == PlatformVersion(1, 20, 4)
        assert PlatformVersion.parse("1.20") == PlatformVersion(1, 20, 0)
        assert PlatformVersion.parse(" 1.19.2 ") == PlatformVersion(1, 19, 2)

    def test_parse_garbage_components(self):
        """Test that missing or non-numeric components become 0."""
        assert PlatformVersion.parse("1") == PlatformVersion(1, 0, 0)
        assert PlatformVersion.parse("1.x.3") == PlatformVersion(1, 0, 3)

    def test_format(self):
        """Test rendering with and without a zero patch."""
        assert PlatformVersion(1, 20, 0).format() == "1.20"
        assert PlatformVersion(1, 20, 0).format(full=True) == "1.20.0"
        assert PlatformVersion(1, 20, 1).format() == "1.20.1"
        assert str(PlatformVersion(1, 20, 4)) == "1.20.4"

    def test_ordering(self):
        """Test component-wise ordering."""
        assert PlatformVersion(1, 20, 4) > PlatformVersion(1, 20, 1)
        assert PlatformVersion(1, 21, 0) > PlatformVersion(1, 20, 6)
        assert PlatformVersion(2, 0, 0) > PlatformVersion(1, 99, 99)

    def test_with_patch(self):
        """Test replacing the patch component."""
        assert PlatformVersion(1, 20, 4).with_patch(1) == PlatformVersion(1, 20, 1)
