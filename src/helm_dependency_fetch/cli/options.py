"""Shared CLI options."""

from __future__ import annotations

import typer

from helm_dependency_fetch.config.settings import settings

OutputOption = typer.Option(settings.default_output, "--output", "-o", help="Output format: table, json, yaml")
TimeoutOption = typer.Option(
    settings.timeout, "--timeout", "-t", min=0.0, help="A timeout, in seconds, for the whole fetch"
)
VerboseOption = typer.Option(False, "--verbose", "-v", help="Log every request and retry")
