"""Refresh and query the local catalog of official repositories."""

from __future__ import annotations

import logging

from rich.console import Console

from bhelm.core.cache_store import CacheStore
from bhelm.core.registry_client import RegistryClient
from bhelm.models.repo import RepositoryRecord

logger = logging.getLogger(__name__)


def update_official_repositories(
    client: RegistryClient,
    store: CacheStore,
    console: Console | None = None,
    show_progress: bool = True,
    status_console: Console | None = None,
) -> list[RepositoryRecord]:
    """Fetch the full verified catalog and replace the cache with it.

    Records are sorted by name so an unchanged catalog yields an identical
    file on every refresh.  The spinner runs on stderr and is stopped before
    any message is printed.
    """
    console = console or Console()
    status = None
    if show_progress:
        status = (status_console or Console(stderr=True)).status("[bold cyan]Updating repositories…")

    def on_rate_limit(page: int) -> None:
        if status:
            status.stop()
        console.print("[yellow]Rate limit reached, waiting...[/yellow]")
        if status:
            status.start()

    if status:
        status.start()
    try:
        repos = client.fetch_all_verified_repositories(on_rate_limit=on_rate_limit)
        repos.sort(key=lambda r: r.name)
        store.replace_all(repos)
    finally:
        if status:
            status.stop()

    logger.debug("Refreshed %d official repositories into %s", len(repos), store.path)
    console.print(f"[green]Official repositories list updated successfully[/green] ({len(repos)} repositories).")
    return repos


def list_official_repositories(store: CacheStore) -> list[RepositoryRecord]:
    return sorted(store.load_all(), key=lambda r: r.name)
