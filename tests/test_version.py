"""
Tests for version parsing and comparison.
"""

import pytest

from hostprep.core.domain.version import meets_minimum, parse_version


class TestParseVersion:
    def test_plain(self):
        assert parse_version("3.11") == (3, 11)

    def test_python_banner(self):
        assert parse_version("Python 3.11.4") == (3, 11, 4)

    def test_leading_v(self):
        assert parse_version("v2.24.0") == (2, 24, 0)

    def test_prerelease_suffix_ignored(self):
        assert parse_version("3.12.0rc1") == (3, 12, 0)

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_version("not-a-version")


class TestMeetsMinimum:
    @pytest.mark.parametrize(
        ("version", "expected"),
        [("3.8", False), ("3.9", True), ("3.11", True), ("3.10", True), ("4.0", True), ("2.7", False)],
    )
    def test_against_3_9(self, version, expected):
        assert meets_minimum(version, "3.9") is expected

    def test_minor_compared_numerically(self):
        # "3.10" sorts before "3.9" as text
        assert meets_minimum("3.10", "3.9")

    def test_different_lengths(self):
        assert meets_minimum("3.9", "3.9.0")
        assert not meets_minimum("3.9", "3.9.1")
