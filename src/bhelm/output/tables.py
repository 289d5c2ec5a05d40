"""Rich table builders for repository candidates and the official catalog."""

from __future__ import annotations

from typing import Sequence

from rich.table import Table

from bhelm.models.repo import PackageSearchResult, RepositoryRecord

Candidate = RepositoryRecord | PackageSearchResult


def candidate_table(candidates: Sequence[Candidate], title: str | None = None) -> Table:
    table = Table(title=title, expand=False)
    table.add_column("Index", justify="right", style="bold")
    table.add_column("Name", style="magenta", no_wrap=True)
    table.add_column("Organization", style="cyan", no_wrap=True)
    table.add_column("Repository URL", style="blue")

    for i, c in enumerate(candidates):
        table.add_row(str(i), c.name, c.organization or "-", c.url)
    return table


def repository_table(repos: Sequence[RepositoryRecord], title: str = "Official Repositories") -> Table:
    table = Table(title=title, expand=True)
    table.add_column("Name", style="magenta", no_wrap=True)
    table.add_column("Organization", style="cyan", no_wrap=True)
    table.add_column("Repository URL", style="blue")

    for r in repos:
        table.add_row(r.name, r.organization, r.url)
    return table
