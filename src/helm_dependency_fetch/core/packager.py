"""Package local (file://) chart dependencies into the charts directory."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import tarfile
from pathlib import Path
from typing import Protocol

import yaml

from helm_dependency_fetch.config.settings import settings
from helm_dependency_fetch.core.errors import PackageError
from helm_dependency_fetch.models.chart import ChartManifest
from helm_dependency_fetch.utils.yaml_loader import load_text_yaml

logger = logging.getLogger(__name__)

_SAVED_TO = re.compile(r"saved it to:\s*(?P<path>\S.*)$", re.MULTILINE)


class Packager(Protocol):
    def package(self, source_path: Path, output_dir: Path) -> Path | None: ...


class HelmPackager:
    """Shell out to ``helm package <source> -d <output>``."""

    def __init__(self, helm_binary: str | None = None) -> None:
        self.helm_binary = helm_binary or settings.helm_binary

    def package(self, source_path: Path, output_dir: Path) -> Path | None:
        cmd = [self.helm_binary, "package", str(source_path), "-d", str(output_dir)]
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise PackageError(f"failed to run {self.helm_binary}: {exc}") from exc

        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout).strip()
            raise PackageError(
                f"helm package {source_path} exited with status {proc.returncode}: {detail}"
            )

        match = _SAVED_TO.search(proc.stdout or "")
        return Path(match.group("path").strip()) if match else None


class TarballPackager:
    """Build the chart archive in-process when helm is not installed.

    Produces the same layout as ``helm package``: a gzip tarball named
    ``<name>-<version>.tgz`` whose single top-level directory is the chart name.
    """

    def package(self, source_path: Path, output_dir: Path) -> Path | None:
        manifest = self._read_manifest(source_path)
        if not manifest.name or not manifest.version:
            raise PackageError(f"{source_path}/Chart.yaml must declare a name and version")

        target = output_dir / f"{manifest.name}-{manifest.version}.tgz"
        try:
            with tarfile.open(target, "w:gz") as archive:
                archive.add(str(source_path), arcname=manifest.name)
        except (OSError, tarfile.TarError) as exc:
            raise PackageError(f"failed to package {source_path}: {exc}") from exc
        logger.debug("Packaged %s into %s", source_path, target)
        return target

    @staticmethod
    def _read_manifest(source_path: Path) -> ChartManifest:
        chart_file = source_path / "Chart.yaml"
        try:
            data = load_text_yaml(chart_file.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise PackageError(f"cannot read {chart_file}: {exc}") from exc
        if not isinstance(data, dict):
            raise PackageError(f"{chart_file} is not a chart manifest")
        return ChartManifest.from_dict(data)


def default_packager() -> Packager:
    """Prefer the real helm binary, fall back to in-process archiving."""
    if shutil.which(settings.helm_binary):
        return HelmPackager()
    logger.debug("%s not found on PATH, packaging local charts in-process", settings.helm_binary)
    return TarballPackager()
