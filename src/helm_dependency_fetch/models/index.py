"""Repository index models (index.yaml)."""

from __future__ import annotations

from dataclasses import dataclass, field

from helm_dependency_fetch.models import scalar_text


@dataclass(frozen=True)
class ChartEntry:
    name: str = ""
    version: str = ""
    urls: tuple[str, ...] = ()
    app_version: str = ""
    api_version: str = ""
    created: str = ""
    description: str = ""
    digest: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> ChartEntry:
        return cls(
            name=scalar_text(d.get("name")),
            version=scalar_text(d.get("version")),
            urls=tuple(scalar_text(u) for u in d.get("urls") or []),
            app_version=scalar_text(d.get("appVersion")),
            api_version=scalar_text(d.get("apiVersion")),
            created=scalar_text(d.get("created")),
            description=scalar_text(d.get("description")),
            digest=scalar_text(d.get("digest")),
        )


@dataclass
class RepositoryIndex:
    api_version: str = ""
    entries: dict[str, list[ChartEntry]] = field(default_factory=dict)
    generated: str = ""
    server_info: str = ""

    def entries_for(self, chart_name: str) -> list[ChartEntry]:
        return self.entries.get(chart_name, [])

    @classmethod
    def from_dict(cls, d: dict) -> RepositoryIndex:
        """Build an index from a decoded document.

        Raises TypeError/AttributeError when the document does not have the
        shape of an index; callers turn that into a decode error.
        """
        if not d:
            return cls()
        entries = {
            scalar_text(chart_name): [ChartEntry.from_dict(e) for e in chart_entries or []]
            for chart_name, chart_entries in (d.get("entries") or {}).items()
        }
        return cls(
            api_version=scalar_text(d.get("apiVersion")),
            entries=entries,
            generated=scalar_text(d.get("generated")),
            server_info=scalar_text(d.get("serverInfo")),
        )
