"""Resolve and download the direct dependencies of a chart."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from helm_dependency_fetch.config.settings import settings
from helm_dependency_fetch.core.chart_locator import download_chart
from helm_dependency_fetch.core.credentials import load_credentials, resolve_credentials
from helm_dependency_fetch.core.deadline import Deadline
from helm_dependency_fetch.core.fetch_client import Getter, NetworkGetter
from helm_dependency_fetch.core.index_cache import IndexCache
from helm_dependency_fetch.core.packager import Packager, default_packager
from helm_dependency_fetch.core.version_resolver import resolve
from helm_dependency_fetch.models import SourceKind
from helm_dependency_fetch.models.chart import Dependency
from helm_dependency_fetch.models.repo import CredentialsTable, FetchResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, Dependency], None]


class DependencyFetcher:
    """Fetches dependencies one at a time, in declaration order.

    The index cache, credentials table and packager are injected so a run
    owns its own state; use ``create()`` for the production wiring.
    """

    def __init__(
        self,
        getter: Getter,
        index_cache: IndexCache | None = None,
        credentials: CredentialsTable | None = None,
        packager: Packager | None = None,
        charts_dir: Path | None = None,
        chart_dir: Path | None = None,
    ) -> None:
        self.getter = getter
        self.index_cache = index_cache if index_cache is not None else IndexCache(getter)
        self.credentials = credentials
        self.packager = packager if packager is not None else default_packager()
        self.chart_dir = chart_dir or Path(".")
        self.charts_dir = charts_dir or self.chart_dir / settings.charts_dir_name

    @classmethod
    def create(cls, chart_dir: Path | None = None, charts_dir: Path | None = None) -> DependencyFetcher:
        getter = NetworkGetter()
        return cls(
            getter=getter,
            index_cache=IndexCache(getter),
            credentials=load_credentials(),
            packager=default_packager(),
            charts_dir=charts_dir,
            chart_dir=chart_dir,
        )

    def __enter__(self) -> DependencyFetcher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self.getter, "close", None)
        if close is not None:
            close()

    def fetch_all(
        self,
        dependencies: Iterable[Dependency],
        deadline: Deadline,
        on_progress: ProgressCallback | None = None,
    ) -> list[FetchResult]:
        """Fetch every dependency, stopping at the first failure."""
        deps = list(dependencies)
        results: list[FetchResult] = []
        for i, dependency in enumerate(deps, 1):
            if on_progress:
                on_progress(i, len(deps), dependency)
            logger.info("Fetching %s @ %s", dependency.name, dependency.version)
            results.append(self.fetch_version(dependency, deadline))
        return results

    def fetch_version(self, dependency: Dependency, deadline: Deadline) -> FetchResult:
        if dependency.is_local:
            return self.fetch_local(dependency)

        credentials = resolve_credentials(self.credentials, dependency.repository)
        index = self.index_cache.get_index(dependency.repository, credentials, deadline)
        resolved, entry = resolve(
            dependency.version,
            index.entries_for(dependency.name),
            chart_name=dependency.name,
            repository=dependency.repository,
        )
        url, path = download_chart(
            self.getter, dependency, resolved, entry, credentials, deadline, self.charts_dir,
        )
        return FetchResult(
            name=dependency.name,
            constraint=dependency.version,
            version=resolved.version,
            source=url,
            path=path,
        )

    def fetch_local(self, dependency: Dependency) -> FetchResult:
        source = Path(dependency.local_path)
        if not source.is_absolute():
            source = self.chart_dir / source
        logger.info("Packaging local chart %s", source)
        path = self.packager.package(source, self.charts_dir)
        return FetchResult(
            name=dependency.name,
            constraint=dependency.version,
            version=dependency.version,
            source=str(source),
            path=path,
            kind=SourceKind.LOCAL,
        )
