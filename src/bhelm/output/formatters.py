"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json

import yaml
from rich.console import Console

from bhelm.models.repo import RepositoryRecord

console = Console()


def output_repositories(
    repos: list[RepositoryRecord],
    fmt: str,
    title: str = "Official Repositories",
) -> None:
    if fmt == "json":
        data = [r.to_cache() for r in repos]
        console.print_json(json.dumps(data, indent=2))
    elif fmt == "yaml":
        data = [r.to_cache() for r in repos]
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False), markup=False, highlight=False)
    else:
        from bhelm.output.tables import repository_table
        console.print(repository_table(repos, title=title))
