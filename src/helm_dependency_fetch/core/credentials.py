"""Repository credentials from Helm's repositories.yaml."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from helm_dependency_fetch.config.settings import settings
from helm_dependency_fetch.core.errors import CredentialsError
from helm_dependency_fetch.models.repo import Credentials, CredentialsTable

logger = logging.getLogger(__name__)


def load_credentials(path: Path | None = None) -> CredentialsTable | None:
    """Load the repositories file, or None when it does not exist.

    Public repositories need no credentials, so a missing file is normal.
    """
    repos_file = path or settings.repositories_file
    if not repos_file.exists():
        logger.debug("No repositories file at %s", repos_file)
        return None
    try:
        data = yaml.safe_load(repos_file.read_text(encoding="utf-8"))
        table = CredentialsTable.from_dict(data or {})
    except (OSError, yaml.YAMLError, AttributeError, TypeError) as exc:
        raise CredentialsError(f"failed to read {repos_file}: {exc}") from exc
    logger.debug("Loaded %d repositories from %s", len(table.repositories), repos_file)
    return table


def resolve_credentials(table: CredentialsTable | None, repository_url: str) -> Credentials:
    """Return the credentials configured for exactly ``repository_url``."""
    if table is None:
        return Credentials()
    for repo in table.repositories:
        if repo.url == repository_url:
            return Credentials(repo.username, repo.password)
    return Credentials()
