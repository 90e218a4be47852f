"""Application configuration and defaults."""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path


def _default_helm_config_dir() -> Path:
    """Return the Helm configuration directory for the current platform.

    Checks HELM_CONFIG_HOME first, then XDG_CONFIG_HOME, matching helm's
    own resolution order.
    """
    config_home = os.environ.get("HELM_CONFIG_HOME", "")
    if config_home:
        return Path(config_home)
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / "helm"
    system = platform.system()
    if system == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "helm"
        return Path.home() / "AppData" / "Roaming" / "helm"
    if system == "Darwin":
        return Path.home() / "Library" / "Preferences" / "helm"
    return Path.home() / ".config" / "helm"


def _default_timeout() -> float:
    raw = os.environ.get("HELM_DEPENDENCY_FETCH_TIMEOUT", "")
    try:
        return float(raw) if raw else 300.0
    except ValueError:
        return 300.0


@dataclass
class Settings:
    helm_config_dir: Path = field(default_factory=_default_helm_config_dir)
    helm_binary: str = "helm"
    charts_dir_name: str = "charts"
    local_scheme: str = "file://"

    # Whole-run deadline, seconds
    timeout: float = field(default_factory=_default_timeout)

    # Per-attempt timeout tier
    connect_timeout: float = 10.0
    read_timeout: float = 5.0
    write_timeout: float = 5.0
    pool_timeout: float = 5.0

    # Backoff between attempts: min * factor**n, capped at max, plus jitter
    backoff_min: float = 1.0
    backoff_max: float = 10.0
    backoff_factor: float = 2.0
    backoff_jitter: float = 1.0
    retry_statuses: frozenset[int] = frozenset({500, 502, 503, 504, 522, 524})

    default_output: str = "table"

    @property
    def repositories_file(self) -> Path:
        return self.helm_config_dir / "repositories.yaml"


# Global singleton
settings = Settings()
