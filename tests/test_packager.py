"""Tests for local chart packaging."""

from __future__ import annotations

import subprocess
import tarfile
from pathlib import Path

import pytest

from helm_dependency_fetch.core import packager as packager_module
from helm_dependency_fetch.core.errors import PackageError
from helm_dependency_fetch.core.packager import HelmPackager, TarballPackager, default_packager


class TestTarballPackager:
    def test_archive_layout(self, local_chart: Path, charts_dir: Path) -> None:
        path = TarballPackager().package(local_chart, charts_dir)

        assert path == charts_dir / "mychart-0.3.1.tgz"
        with tarfile.open(path, "r:gz") as archive:
            names = archive.getnames()
        assert "mychart/Chart.yaml" in names
        assert "mychart/values.yaml" in names
        assert "mychart/templates/deployment.yaml" in names

    def test_missing_chart_yaml(self, tmp_path: Path, charts_dir: Path) -> None:
        with pytest.raises(PackageError):
            TarballPackager().package(tmp_path / "nowhere", charts_dir)

    def test_chart_without_version(self, local_chart: Path, charts_dir: Path) -> None:
        (local_chart / "Chart.yaml").write_text("name: mychart\n", encoding="utf-8")

        with pytest.raises(PackageError):
            TarballPackager().package(local_chart, charts_dir)


class TestHelmPackager:
    def test_runs_helm_package(
        self, local_chart: Path, charts_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[list[str]] = []

        def fake_run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess:
            calls.append(cmd)
            out = f"Successfully packaged chart and saved it to: {charts_dir}/mychart-0.3.1.tgz\n"
            return subprocess.CompletedProcess(cmd, 0, stdout=out, stderr="")

        monkeypatch.setattr(packager_module.subprocess, "run", fake_run)

        path = HelmPackager("helm").package(local_chart, charts_dir)

        assert calls == [["helm", "package", str(local_chart), "-d", str(charts_dir)]]
        assert path == charts_dir / "mychart-0.3.1.tgz"

    def test_failure_surfaces_stderr(
        self, local_chart: Path, charts_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fake_run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess:
            return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="Error: chart metadata is missing")

        monkeypatch.setattr(packager_module.subprocess, "run", fake_run)

        with pytest.raises(PackageError) as excinfo:
            HelmPackager("helm").package(local_chart, charts_dir)
        assert "chart metadata is missing" in str(excinfo.value)

    def test_missing_binary(self, local_chart: Path, charts_dir: Path) -> None:
        with pytest.raises(PackageError):
            HelmPackager("definitely-not-a-helm-binary-5f3a").package(local_chart, charts_dir)


def test_default_packager_prefers_helm(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(packager_module.shutil, "which", lambda name: f"/usr/local/bin/{name}")
    assert isinstance(default_packager(), HelmPackager)

    monkeypatch.setattr(packager_module.shutil, "which", lambda name: None)
    assert isinstance(default_packager(), TarballPackager)


def test_archive_name_keeps_unquoted_version(local_chart: Path, charts_dir: Path) -> None:
    (local_chart / "Chart.yaml").write_text("apiVersion: v2\nname: mychart\nversion: 1.10\n", encoding="utf-8")

    assert TarballPackager().package(local_chart, charts_dir) == charts_dir / "mychart-1.10.tgz"
