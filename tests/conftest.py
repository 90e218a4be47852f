"""Shared pytest fixtures for helm_dependency_fetch tests."""

from __future__ import annotations

import textwrap
from pathlib import Path

import httpx
import pytest

from helm_dependency_fetch.core.deadline import Deadline
from helm_dependency_fetch.core.errors import FetchStatusError
from helm_dependency_fetch.models.repo import Credentials

REPO_URL = "https://charts.example.com"

INDEX_YAML = textwrap.dedent(
    """
    apiVersion: v1
    entries:
      redis:
        - name: redis
          version: 5.0.0
          urls:
            - charts/redis-5.0.0.tgz
        - name: redis
          version: 6.0.0-rc.1
          urls:
            - charts/redis-6.0.0-rc.1.tgz
        - name: redis
          version: 5.2.1
          appVersion: "6.0.9"
          digest: abc123
          urls:
            - charts/redis-5.2.1.tgz
      postgresql:
        - name: postgresql
          version: 10.3.4
          urls:
            - https://mirror.example.org/postgresql-10.3.4.tgz
    generated: "2021-01-01T00:00:00Z"
    serverInfo: chartmuseum
    """
)


class FakeClock:
    """Virtual monotonic clock; sleeping just moves time forward."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeGetter:
    """Getter double serving canned bodies per URL and counting calls."""

    def __init__(self, responses: dict[str, bytes | int | Exception] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, Credentials]] = []

    def get(self, url: str, credentials: Credentials, deadline: Deadline) -> httpx.Response:
        self.calls.append((url, credentials))
        canned = self.responses.get(url, 404)
        if isinstance(canned, Exception):
            raise canned
        if isinstance(canned, int):
            response = httpx.Response(canned)
            if not response.is_success:
                raise FetchStatusError(url, canned, response.reason_phrase)
            return response
        return httpx.Response(200, content=canned)

    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def deadline(clock: FakeClock) -> Deadline:
    return Deadline(300.0, clock=clock, sleep=clock.sleep)


@pytest.fixture
def index_yaml() -> bytes:
    return INDEX_YAML.encode("utf-8")


@pytest.fixture
def fake_getter(index_yaml: bytes) -> FakeGetter:
    return FakeGetter({
        f"{REPO_URL}/index.yaml": index_yaml,
        f"{REPO_URL}/charts/redis-5.2.1.tgz": b"redis-5.2.1 archive bytes",
        f"{REPO_URL}/charts/redis-5.0.0.tgz": b"redis-5.0.0 archive bytes",
        "https://mirror.example.org/postgresql-10.3.4.tgz": b"postgresql archive bytes",
    })


@pytest.fixture
def charts_dir(tmp_path: Path) -> Path:
    path = tmp_path / "charts"
    path.mkdir()
    return path


@pytest.fixture
def local_chart(tmp_path: Path) -> Path:
    """A minimal chart source tree on disk."""
    source = tmp_path / "src" / "mychart"
    (source / "templates").mkdir(parents=True)
    (source / "Chart.yaml").write_text(
        "apiVersion: v2\nname: mychart\nversion: 0.3.1\n", encoding="utf-8"
    )
    (source / "values.yaml").write_text("replicas: 1\n", encoding="utf-8")
    (source / "templates" / "deployment.yaml").write_text("kind: Deployment\n", encoding="utf-8")
    return source
