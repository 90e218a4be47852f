"""Repository credential and fetch outcome models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from helm_dependency_fetch.models import SourceKind, scalar_text


@dataclass(frozen=True)
class Credentials:
    username: str = ""
    password: str = ""

    def __bool__(self) -> bool:
        return bool(self.username)


@dataclass(frozen=True)
class RepositoryCredentials:
    name: str = ""
    url: str = ""
    username: str = ""
    password: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> RepositoryCredentials:
        return cls(
            name=scalar_text(d.get("name")),
            url=scalar_text(d.get("url")),
            username=scalar_text(d.get("username")),
            password=scalar_text(d.get("password")),
        )


@dataclass
class CredentialsTable:
    repositories: list[RepositoryCredentials] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> CredentialsTable:
        if not d:
            return cls()
        return cls(
            repositories=[RepositoryCredentials.from_dict(r) for r in d.get("repositories") or []],
        )


@dataclass(frozen=True)
class ResolvedVersion:
    version: str  # normalized, e.g. "1.2.0" for "v1.2"
    original: str  # as published in the index

    def __str__(self) -> str:
        return self.version


@dataclass
class FetchResult:
    name: str
    constraint: str
    version: str
    source: str
    path: Path | None = None
    kind: SourceKind = SourceKind.REMOTE

    @property
    def local(self) -> bool:
        return self.kind == SourceKind.LOCAL
