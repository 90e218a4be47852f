"""Rich table builders."""

from __future__ import annotations

from rich.table import Table

from helm_dependency_fetch.models.repo import FetchResult
from helm_dependency_fetch.output.themes import styled_source


def fetch_results_table(results: list[FetchResult]) -> Table:
    table = Table(title="Fetched Dependencies", expand=True)
    table.add_column("Chart", style="magenta", no_wrap=True)
    table.add_column("Constraint", style="dim")
    table.add_column("Version", style="bold")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Source", style="dim", overflow="fold")
    table.add_column("Artifact", style="green", overflow="fold")

    for r in results:
        table.add_row(
            r.name,
            r.constraint or "-",
            r.version or "-",
            styled_source(r.kind),
            r.source,
            str(r.path) if r.path else "-",
        )
    return table
