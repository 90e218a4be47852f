"""Per-run cache of repository index.yaml documents."""

from __future__ import annotations

import logging
import threading

import yaml

from helm_dependency_fetch.core.deadline import Deadline
from helm_dependency_fetch.core.errors import FetchStatusError, IndexDecodeError, IndexFetchError
from helm_dependency_fetch.core.fetch_client import Getter
from helm_dependency_fetch.models.index import RepositoryIndex
from helm_dependency_fetch.models.repo import Credentials
from helm_dependency_fetch.utils.yaml_loader import load_text_yaml

logger = logging.getLogger(__name__)


def index_url(repository_url: str) -> str:
    return f"{repository_url.rstrip('/')}/index.yaml"


def decode_index(repository_url: str, body: bytes | str) -> RepositoryIndex:
    """Decode an index.yaml document."""
    try:
        data = load_text_yaml(body)
    except yaml.YAMLError as exc:
        raise IndexDecodeError(repository_url, str(exc)) from exc
    if data is None:
        return RepositoryIndex()
    if not isinstance(data, dict):
        raise IndexDecodeError(repository_url, f"expected a mapping, got {type(data).__name__}")
    try:
        return RepositoryIndex.from_dict(data)
    except (AttributeError, TypeError) as exc:
        raise IndexDecodeError(repository_url, f"unexpected index layout: {exc}") from exc


class IndexCache:
    """Repository URL -> RepositoryIndex, filled at most once per URL.

    Entries are never refreshed: every dependency against a repository sees
    the snapshot fetched first. A lock per URL keeps that true when callers
    share the cache across threads.
    """

    def __init__(self, getter: Getter) -> None:
        self._getter = getter
        self._indexes: dict[str, RepositoryIndex] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()
        self.fetch_count = 0

    def __contains__(self, repository_url: object) -> bool:
        return repository_url in self._indexes

    def __len__(self) -> int:
        return len(self._indexes)

    def get_index(
        self, repository_url: str, credentials: Credentials, deadline: Deadline,
    ) -> RepositoryIndex:
        cached = self._indexes.get(repository_url)
        if cached is not None:
            return cached

        with self._lock_for(repository_url):
            cached = self._indexes.get(repository_url)
            if cached is not None:
                return cached
            index = self._fetch(repository_url, credentials, deadline)
            self._indexes[repository_url] = index
            return index

    def _lock_for(self, repository_url: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(repository_url, threading.Lock())

    def _fetch(self, repository_url: str, credentials: Credentials, deadline: Deadline) -> RepositoryIndex:
        url = index_url(repository_url)
        logger.info("Fetching index from %s", repository_url)
        self.fetch_count += 1
        try:
            response = self._getter.get(url, credentials, deadline)
        except FetchStatusError as exc:
            raise IndexFetchError(repository_url, exc.status) from exc

        if response.status_code != 200:
            status = f"{response.status_code} {response.reason_phrase}".strip()
            raise IndexFetchError(repository_url, status)

        index = decode_index(repository_url, response.content)
        logger.debug(
            "Index for %s lists %d chart(s)", repository_url, len(index.entries),
        )
        return index
