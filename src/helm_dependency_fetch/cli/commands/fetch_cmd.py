"""helm-dependency-fetch [CHART_DIR] - Fetch a chart's dependencies."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from helm_dependency_fetch.cli.options import OutputOption, TimeoutOption, VerboseOption
from helm_dependency_fetch.core.deadline import Deadline
from helm_dependency_fetch.core.dependency_fetcher import DependencyFetcher
from helm_dependency_fetch.core.errors import HelmDependencyFetchError
from helm_dependency_fetch.core.manifest_loader import ensure_charts_directory, load_dependencies
from helm_dependency_fetch.models.chart import Dependency
from helm_dependency_fetch.output.formatters import output_results

console = Console(stderr=True)


def _build_fetcher(chart_dir: Path, charts_dir: Path) -> DependencyFetcher:
    return DependencyFetcher.create(chart_dir=chart_dir, charts_dir=charts_dir)


def fetch(
    chart_dir: Path = typer.Argument(Path("."), help="Chart directory (default: current directory)"),
    timeout: float = TimeoutOption,
    output: str = OutputOption,
    verbose: bool = VerboseOption,
) -> None:
    """Fetch the chart dependencies declared by CHART_DIR into CHART_DIR/charts."""
    from helm_dependency_fetch.cli.app import configure_logging

    configure_logging(verbose)

    if not chart_dir.is_dir():
        typer.echo(f"Failed to change directory to {chart_dir}", err=True)
        typer.echo("Does the supplied chart directory exist?", err=True)
        raise typer.Exit(code=1)

    try:
        dependencies = load_dependencies(chart_dir)
        charts_dir = ensure_charts_directory(chart_dir)

        deadline = Deadline(timeout)
        with console.status("[bold cyan]Fetching dependencies…") as status:

            def on_progress(i: int, total: int, dependency: Dependency) -> None:
                status.update(
                    f"[bold cyan]Fetching {dependency.name} @ {dependency.version}… "
                    f"[dim]({i}/{total})[/dim]"
                )

            with _build_fetcher(chart_dir, charts_dir) as fetcher:
                results = fetcher.fetch_all(dependencies, deadline, on_progress=on_progress)
    except HelmDependencyFetchError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not results:
        console.print("[dim]No dependencies declared.[/dim]")
        return
    output_results(results, output)
