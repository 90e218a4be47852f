"""Tests for version and constraint parsing."""

from __future__ import annotations

import pytest

from helm_dependency_fetch.core.errors import InvalidConstraintError, InvalidVersionError, VersionParseError
from helm_dependency_fetch.utils.semver import parse_constraint, parse_version


class TestParseVersion:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1.2.3", "1.2.3"),
            ("v1.2.3", "1.2.3"),
            ("1.2", "1.2.0"),
            ("2", "2.0.0"),
            ("1.0.0-rc.1", "1.0.0-rc.1"),
            ("1.0.0+build.5", "1.0.0+build.5"),
        ],
    )
    def test_lenient_forms(self, text: str, expected: str) -> None:
        assert str(parse_version(text)) == expected

    @pytest.mark.parametrize("text", ["", "latest", "1.2.3.4", "1..2", "1.2.3-", "v"])
    def test_rejects_garbage(self, text: str) -> None:
        with pytest.raises(InvalidVersionError):
            parse_version(text)

    def test_prerelease_orders_before_release(self) -> None:
        assert parse_version("1.0.0-alpha") < parse_version("1.0.0-alpha.1")
        assert parse_version("1.0.0-rc.1") < parse_version("1.0.0")
        assert parse_version("1.10.0") > parse_version("1.9.9")


class TestParseConstraint:
    @pytest.mark.parametrize(
        "constraint, version, expected",
        [
            (">=1.2.0", "1.2.0", True),
            (">= 1.2.0", "2.5.0", True),
            (">=1.2.0", "1.1.9", False),
            (">= 1.2, < 2.0", "1.9.9", True),
            (">= 1.2, < 2.0", "2.0.0", False),
            ("^1.2.0", "1.9.0", True),
            ("^1.2.0", "2.0.0", False),
            ("~1.2.0", "1.2.9", True),
            ("~1.2.0", "1.3.0", False),
            ("~>1.2.0", "1.2.5", True),
            ("=>1.0.0", "1.0.1", True),
            ("=<1.0.0", "1.0.1", False),
            ("1.x", "1.7.3", True),
            ("1.x", "2.0.0", False),
            ("*", "9.9.9", True),
            ("", "0.0.1", True),
            ("1.2.3", "1.2.3", True),
            ("1.2.3", "1.2.4", False),
            ("1.0.0 - 1.4.0", "1.4.0", True),
            ("1.0.0 - 1.4.0", "1.4.1", False),
            ("^1.0.0 || ^3.0.0", "3.1.0", True),
            ("^1.0.0 || ^3.0.0", "2.1.0", False),
            (">=1.0.0, !=1.5.0", "1.5.0", False),
            (">=1.0.0, != 1.5.0", "1.6.0", True),
        ],
    )
    def test_matching(self, constraint: str, version: str, expected: bool) -> None:
        assert parse_constraint(constraint).match(parse_version(version)) is expected

    def test_prerelease_needs_prerelease_clause_on_same_patch(self) -> None:
        assert not parse_constraint(">=5.0.0").match(parse_version("6.0.0-rc.1"))
        assert parse_constraint(">=6.0.0-rc.0").match(parse_version("6.0.0-rc.1"))
        assert not parse_constraint(">=6.0.0-rc.0").match(parse_version("6.0.1-rc.1"))

    @pytest.mark.parametrize(
        "constraint",
        [">=foo", "bananas", ">=1.0.0 <<2", "!=", "^1.0.0 ||", "|| ^1.0.0", ",", "^1.0.0 || || ^2.0.0"],
    )
    def test_malformed_constraint(self, constraint: str) -> None:
        with pytest.raises(InvalidConstraintError) as excinfo:
            parse_constraint(constraint)
        assert isinstance(excinfo.value, VersionParseError)
        assert constraint in str(excinfo.value)

    @pytest.mark.parametrize("constraint", ["", "   "])
    def test_blank_constraint_means_any(self, constraint: str) -> None:
        assert parse_constraint(constraint).match(parse_version("9.9.9"))

    def test_contains(self) -> None:
        assert parse_version("1.4.0") in parse_constraint("^1.0.0")
