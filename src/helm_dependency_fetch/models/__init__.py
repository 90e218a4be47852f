"""Data models for helm-dependency-fetch."""

from __future__ import annotations

import enum


class ManifestSchema(enum.Enum):
    """Where a chart declares its dependencies."""

    LEGACY = "legacy"  # apiVersion v1: sibling requirements.yaml
    EMBEDDED = "embedded"  # apiVersion v2+: Chart.yaml dependencies

    @classmethod
    def from_api_version(cls, api_version: str) -> ManifestSchema:
        if api_version == "v1":
            return cls.LEGACY
        return cls.EMBEDDED


class SourceKind(enum.Enum):
    REMOTE = "remote"
    LOCAL = "local"


def scalar_text(value: object) -> str:
    """Render a YAML scalar as text (booleans and timestamps still decode)."""
    if value is None:
        return ""
    return str(value)
