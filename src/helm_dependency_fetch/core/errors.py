"""Exception hierarchy for dependency resolution and retrieval."""

from __future__ import annotations


class HelmDependencyFetchError(Exception):
    """Base exception for every failure surfaced to the CLI."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FetchError(HelmDependencyFetchError):
    """A network fetch could not produce a usable response."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class FetchTimeoutError(FetchError):
    """The run deadline elapsed (or was cancelled) before a fetch succeeded."""


class FetchStatusError(FetchError):
    """The server answered with a status that is not worth retrying."""

    def __init__(self, url: str, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"GET {url} failed (status: {self.status})", url=url)

    @property
    def status(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class IndexFetchError(HelmDependencyFetchError):
    """A repository index could not be retrieved."""

    def __init__(self, repository: str, status: str) -> None:
        self.repository = repository
        self.status = status
        super().__init__(f"failed to retrieve index from {repository} (status: {status})")


class IndexDecodeError(HelmDependencyFetchError):
    """A repository index document was malformed."""

    def __init__(self, repository: str, detail: str) -> None:
        self.repository = repository
        super().__init__(f"failed to decode index from {repository}: {detail}")


class VersionParseError(HelmDependencyFetchError):
    """Base for malformed version or constraint input."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.reason = message
        self.chart = ""
        self.repository = ""

    def add_context(self, chart: str = "", repository: str = "") -> None:
        """Name the dependency the bad input belongs to."""
        self.chart = chart or self.chart
        self.repository = repository or self.repository
        where = []
        if self.chart:
            where.append(f"chart {self.chart!r}")
        if self.repository:
            where.append(f"repository {self.repository}")
        if where:
            self.message = f"{self.reason} ({', '.join(where)})"
            self.args = (self.message,)


class InvalidConstraintError(VersionParseError):
    def __init__(self, constraint: str, detail: str = "") -> None:
        self.constraint = constraint
        message = f"invalid version constraint {constraint!r}"
        super().__init__(f"{message}: {detail}" if detail else message)


class InvalidVersionError(VersionParseError):
    def __init__(self, version: str, detail: str = "") -> None:
        self.version = version
        message = f"invalid semantic version {version!r}"
        super().__init__(f"{message}: {detail}" if detail else message)


class NoMatchingVersionError(HelmDependencyFetchError):
    """No published version satisfies the requested constraint."""

    def __init__(self, chart: str, constraint: str, available: int = 0) -> None:
        self.chart = chart
        self.constraint = constraint
        self.available = available
        super().__init__(
            f"couldn't find a version of {chart!r} to satisfy the constraint "
            f"{constraint!r} ({available} version(s) published)"
        )


class ChartLocateError(HelmDependencyFetchError):
    """A resolved entry does not say where to download the chart from."""


class ChartWriteError(HelmDependencyFetchError):
    """A downloaded chart could not be written to the charts directory."""


class PackageError(HelmDependencyFetchError):
    """Packaging a local chart directory failed."""


class CredentialsError(HelmDependencyFetchError):
    """The Helm repositories file exists but could not be read."""


class ManifestError(HelmDependencyFetchError):
    """Chart.yaml / requirements.yaml could not be loaded."""
