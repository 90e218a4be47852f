"""Pick the best published chart version for a constraint."""

from __future__ import annotations

import logging
from typing import Sequence

from helm_dependency_fetch.core.errors import NoMatchingVersionError, VersionParseError
from helm_dependency_fetch.models.index import ChartEntry
from helm_dependency_fetch.models.repo import ResolvedVersion
from helm_dependency_fetch.utils.semver import parse_constraint, parse_version

logger = logging.getLogger(__name__)


def resolve(
    constraint: str,
    entries: Sequence[ChartEntry],
    chart_name: str = "",
    repository: str = "",
) -> tuple[ResolvedVersion, ChartEntry]:
    """Return the greatest version in ``entries`` that satisfies ``constraint``.

    Every entry version must parse; one bad version fails the whole
    resolution rather than being skipped. Raises InvalidConstraintError,
    InvalidVersionError or NoMatchingVersionError.
    """
    name = chart_name or (entries[0].name if entries else "")
    try:
        spec = parse_constraint(constraint)
        candidates = []
        for entry in entries:
            version = parse_version(entry.version)
            if spec.match(version):
                candidates.append((version, entry))
    except VersionParseError as exc:
        exc.add_context(chart=name, repository=repository)
        raise

    if not candidates:
        raise NoMatchingVersionError(name, constraint, len(entries))

    # max() keeps the first of equal-precedence versions (build metadata only)
    best, entry = max(candidates, key=lambda candidate: candidate[0])
    logger.debug(
        "Resolved %s %r to %s (%d of %d versions matched)",
        chart_name or entry.name, constraint, best, len(candidates), len(entries),
    )
    return ResolvedVersion(version=str(best), original=entry.version), entry
