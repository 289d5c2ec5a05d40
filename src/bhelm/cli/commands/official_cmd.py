"""bhelm official - Manage the list of official repositories."""

from __future__ import annotations

import typer
from rich.console import Console

from bhelm.cli.options import OutputOption, fail
from bhelm.core.cache_store import CacheStore
from bhelm.core.errors import BhelmError, CacheNotFoundError
from bhelm.core.official import list_official_repositories, update_official_repositories
from bhelm.core.registry_client import RegistryClient
from bhelm.output.formatters import output_repositories

app = typer.Typer(
    help="List, update, and query official repositories from Artifact Hub.",
    no_args_is_help=True,
)
console = Console()


def _refresh(store: CacheStore) -> None:
    console.print("Updating official repositories...")
    with RegistryClient() as client:
        update_official_repositories(client, store, console=console)


@app.command("update")
def update() -> None:
    """Update the list of official repositories."""
    try:
        _refresh(CacheStore())
    except BhelmError as exc:
        fail(exc)


@app.command("list")
def list_repos(output: str = OutputOption) -> None:
    """List the official repositories."""
    try:
        repos = list_official_repositories(CacheStore())
    except CacheNotFoundError as exc:
        typer.echo("Tip: run 'bhelm official update' to build the local list.", err=True)
        fail(exc)
    except BhelmError as exc:
        fail(exc)
    output_repositories(repos, output)


@app.command("search")
def search(
    organization: str = typer.Argument(help="Organization name (exact, case-sensitive)"),
    refresh: bool = typer.Option(False, "--refresh", help="Update the local list before searching"),
    output: str = OutputOption,
) -> None:
    """Show the official repositories published by one organization."""
    store = CacheStore()
    try:
        if refresh or not store.exists():
            _refresh(store)
        repos = store.get_by_organization(organization)
    except BhelmError as exc:
        fail(exc)
    output_repositories(repos, output, title=f"Official Repositories: {organization}")
