"""Read a chart's declared dependencies from Chart.yaml / requirements.yaml."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from helm_dependency_fetch.config.settings import settings
from helm_dependency_fetch.core.errors import ManifestError
from helm_dependency_fetch.models import ManifestSchema
from helm_dependency_fetch.models.chart import ChartManifest, Dependency
from helm_dependency_fetch.utils.yaml_loader import load_text_yaml

logger = logging.getLogger(__name__)

CHART_FILE = "Chart.yaml"
REQUIREMENTS_FILE = "requirements.yaml"


def _read_yaml(path: Path) -> dict:
    try:
        data = load_text_yaml(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestError(f"unable to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ManifestError(f"unable to parse {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a mapping")
    return data


def load_manifest(chart_dir: Path) -> ChartManifest:
    """Decode Chart.yaml in ``chart_dir``."""
    data = _read_yaml(chart_dir / CHART_FILE)
    try:
        return ChartManifest.from_dict(data)
    except (AttributeError, TypeError) as exc:
        raise ManifestError(f"malformed dependencies in {chart_dir / CHART_FILE}: {exc}") from exc


def load_dependencies(chart_dir: Path) -> list[Dependency]:
    """Return the chart's direct dependencies in declaration order.

    apiVersion v1 charts keep them in requirements.yaml; later charts embed
    them in Chart.yaml.
    """
    manifest = load_manifest(chart_dir)
    schema = manifest.schema
    logger.debug("%s uses the %s dependency layout", chart_dir / CHART_FILE, schema.value)

    if schema is ManifestSchema.EMBEDDED:
        return manifest.dependencies

    requirements = chart_dir / REQUIREMENTS_FILE
    if not requirements.exists():
        logger.debug("No %s, chart has no dependencies", requirements)
        return []
    data = _read_yaml(requirements)
    try:
        return [Dependency.from_dict(d) for d in data.get("dependencies") or []]
    except (AttributeError, TypeError) as exc:
        raise ManifestError(f"malformed dependencies in {requirements}: {exc}") from exc


def ensure_charts_directory(chart_dir: Path) -> Path:
    """Create ``<chart_dir>/charts`` if needed and return it."""
    charts_dir = chart_dir / settings.charts_dir_name
    if charts_dir.exists() and not charts_dir.is_dir():
        raise ManifestError(f"{charts_dir} exists and is not a directory")
    try:
        charts_dir.mkdir(mode=0o755, exist_ok=True)
    except OSError as exc:
        raise ManifestError(f"failed to create {charts_dir}: {exc}") from exc
    return charts_dir
