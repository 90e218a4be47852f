"""Root Typer application."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="helm-dependency-fetch",
    help=(
        "A drop in replacement for 'helm dependency build'. Fetches the chart "
        "dependencies for the supplied chart directory (default: current directory). "
        "Lock files are neither generated nor read; the latest matching "
        "dependencies are fetched on each execution."
    ),
    add_completion=False,
)


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through rich on stderr."""
    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=verbose)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _register_commands() -> None:
    from helm_dependency_fetch.cli.commands.fetch_cmd import fetch

    app.command(name="fetch")(fetch)


_register_commands()


def main() -> None:
    app()
