"""Semantic version and constraint parsing.

Versions are read leniently, the way Helm charts write them in the wild:
an optional leading ``v`` and missing minor/patch numbers are accepted
(``v1.2`` is ``1.2.0``). Constraints follow npm range semantics via
``semantic_version.NpmSpec``, after rewriting Helm's syntax (comma for AND,
spaces after operators, ``=>``/``=<``/``~>``, ``!=`` exclusions).

Pre-release versions only satisfy a clause that itself names a pre-release
of the same major.minor.patch, so ``>=5.0.0`` never picks ``6.0.0-rc.1``.
"""

from __future__ import annotations

import re

from semantic_version import NpmSpec, Version

from helm_dependency_fetch.core.errors import InvalidConstraintError, InvalidVersionError

_IDENT = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_VERSION_RE = re.compile(
    r"^v?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
    rf"(?:-(?P<prerelease>{_IDENT}))?(?:\+(?P<build>{_IDENT}))?$"
)

_OPERATOR_ALIASES = (("=>", ">="), ("=<", "<="), ("~>", "~"))
_SPACED_OPERATOR = re.compile(r"(!=|<=|>=|<|>|=|\^|~)\s+")


def parse_version(text: str) -> Version:
    """Parse a published version string, raising InvalidVersionError."""
    match = _VERSION_RE.match(text.strip())
    if not match:
        raise InvalidVersionError(text)
    prerelease = match.group("prerelease")
    build = match.group("build")
    try:
        return Version(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
        )
    except ValueError as exc:
        raise InvalidVersionError(text, str(exc)) from exc


class _Alternative:
    """One ``||`` branch: an npm range minus any ``!=`` exclusions."""

    def __init__(self, spec: NpmSpec, exclusions: tuple[NpmSpec, ...]) -> None:
        self.spec = spec
        self.exclusions = exclusions

    def match(self, version: Version) -> bool:
        if not self.spec.match(version):
            return False
        return not any(excluded.match(version) for excluded in self.exclusions)


class Constraint:
    """A parsed version constraint expression."""

    def __init__(self, expression: str) -> None:
        self.expression = expression
        self._alternatives = [
            _parse_alternative(expression, group) for group in _normalize(expression).split("||")
        ]

    def match(self, version: Version) -> bool:
        return any(alt.match(version) for alt in self._alternatives)

    def __contains__(self, version: Version) -> bool:
        return self.match(version)

    def __str__(self) -> str:
        return self.expression

    def __repr__(self) -> str:
        return f"Constraint({self.expression!r})"


def parse_constraint(expression: str) -> Constraint:
    """Parse a constraint, raising InvalidConstraintError when malformed."""
    return Constraint(expression)


def _normalize(expression: str) -> str:
    text = expression.strip()
    for alias, operator in _OPERATOR_ALIASES:
        text = text.replace(alias, operator)
    return _SPACED_OPERATOR.sub(r"\1", text)


def _parse_alternative(expression: str, group: str) -> _Alternative:
    tokens = group.replace(",", " ").split()
    if not tokens and expression.strip():
        raise InvalidConstraintError(expression, "empty constraint clause")
    excluded = [t[2:] for t in tokens if t.startswith("!=")]
    if any(not e for e in excluded):
        raise InvalidConstraintError(expression, "'!=' without a version")
    kept = " ".join(t for t in tokens if not t.startswith("!=")) or "*"
    try:
        return _Alternative(NpmSpec(kept), tuple(NpmSpec(e) for e in excluded))
    except ValueError as exc:
        raise InvalidConstraintError(expression, str(exc)) from exc
