"""Locate a resolved chart archive and download it into the charts directory."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlsplit

from helm_dependency_fetch.core.deadline import Deadline
from helm_dependency_fetch.core.errors import ChartLocateError, ChartWriteError
from helm_dependency_fetch.core.fetch_client import Getter
from helm_dependency_fetch.models.chart import Dependency
from helm_dependency_fetch.models.index import ChartEntry
from helm_dependency_fetch.models.repo import Credentials, ResolvedVersion

logger = logging.getLogger(__name__)


def is_absolute_url(url: str) -> bool:
    return bool(urlsplit(url).scheme)


def resolve_chart_url(repository: str, url: str) -> str:
    """Absolute URLs win; relative ones hang off the repository base."""
    if is_absolute_url(url):
        return url
    return f"{repository.rstrip('/')}/{url.lstrip('/')}"


def artifact_path(charts_dir: Path, name: str, version: str) -> Path:
    return charts_dir / f"{name}-{version}.tgz"


def download_chart(
    getter: Getter,
    dependency: Dependency,
    resolved: ResolvedVersion,
    entry: ChartEntry,
    credentials: Credentials,
    deadline: Deadline,
    charts_dir: Path,
) -> tuple[str, Path]:
    """Fetch the entry's first URL and write it as ``<name>-<version>.tgz``.

    Any existing file of that name is overwritten. Returns the URL used
    and the path written.
    """
    if not entry.urls:
        raise ChartLocateError(
            f"index entry {dependency.name}-{resolved.original} in {dependency.repository} has no urls"
        )

    url = resolve_chart_url(dependency.repository, entry.urls[0])
    logger.info("Fetching chart: %s", url)
    response = getter.get(url, credentials, deadline)

    target = artifact_path(charts_dir, dependency.name, resolved.version)
    try:
        target.write_bytes(response.content)
    except OSError as exc:
        raise ChartWriteError(f"unable to write chart {target}: {exc}") from exc
    logger.debug("Wrote %d bytes to %s", len(response.content), target)
    return url, target
