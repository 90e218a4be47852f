"""Chart manifest models."""

from __future__ import annotations

from dataclasses import dataclass, field

from helm_dependency_fetch.config.settings import settings
from helm_dependency_fetch.models import ManifestSchema, scalar_text


@dataclass(frozen=True)
class Dependency:
    """A declared dependency.

    ``alias`` and ``condition`` are kept so a manifest decodes losslessly;
    fetching ignores them, as ``helm dependency build`` downloads every
    declared chart under its own name.
    """

    name: str = ""
    repository: str = ""
    version: str = ""
    alias: str = ""
    condition: str = ""

    @property
    def is_local(self) -> bool:
        return self.repository.startswith(settings.local_scheme)

    @property
    def local_path(self) -> str:
        return self.repository[len(settings.local_scheme):] if self.is_local else ""

    @classmethod
    def from_dict(cls, d: dict) -> Dependency:
        return cls(
            name=scalar_text(d.get("name")),
            repository=scalar_text(d.get("repository")),
            version=scalar_text(d.get("version")),
            alias=scalar_text(d.get("alias")),
            condition=scalar_text(d.get("condition")),
        )


@dataclass
class ChartManifest:
    api_version: str = ""
    name: str = ""
    version: str = ""
    dependencies: list[Dependency] = field(default_factory=list)

    @property
    def schema(self) -> ManifestSchema:
        return ManifestSchema.from_api_version(self.api_version)

    @classmethod
    def from_dict(cls, d: dict) -> ChartManifest:
        if not d:
            return cls()
        return cls(
            api_version=scalar_text(d.get("apiVersion")),
            name=scalar_text(d.get("name")),
            version=scalar_text(d.get("version")),
            dependencies=[Dependency.from_dict(dep) for dep in d.get("dependencies") or []],
        )
