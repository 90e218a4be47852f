"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from helm_dependency_fetch.models.repo import FetchResult

console = Console()


def _result_to_dict(r: FetchResult) -> dict[str, Any]:
    return {
        "name": r.name,
        "constraint": r.constraint,
        "version": r.version,
        "kind": r.kind.value,
        "source": r.source,
        "path": str(r.path) if r.path else None,
    }


def output_results(results: list[FetchResult], fmt: str) -> None:
    if fmt == "json":
        data = [_result_to_dict(r) for r in results]
        console.print_json(json.dumps(data, indent=2))
    elif fmt == "yaml":
        data = [_result_to_dict(r) for r in results]
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        from helm_dependency_fetch.output.tables import fetch_results_table
        console.print(fetch_results_table(results))
