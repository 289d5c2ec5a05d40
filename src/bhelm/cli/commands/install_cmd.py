"""bhelm install <namespace> <software> - Resolve a chart repository and install it."""

from __future__ import annotations

import typer
from rich.console import Console

from bhelm.cli.options import fail
from bhelm.core import installer
from bhelm.core.cache_store import CacheStore
from bhelm.core.errors import BhelmError
from bhelm.core.registry_client import RegistryClient
from bhelm.core.resolver import RepositoryResolver

app = typer.Typer()
console = Console()


@app.callback(invoke_without_command=True)
def install(
    namespace: str = typer.Argument(help="Target Kubernetes namespace"),
    software: str = typer.Argument(help="Software (chart) name"),
    org: str = typer.Option("", "--org", "-o", help="Specify the organization (optional)"),
    user: str = typer.Option("", "--user", "-u", help="Specify the user (optional)"),
    version: str = typer.Option("", "--version", "-v", help="Specify the version of the software (optional)"),
    values: str = typer.Option("", "--values", help="Specify a values file (optional)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable detailed logs (optional)"),
) -> None:
    """Install a Kubernetes application using Helm."""
    with RegistryClient() as client:
        resolver = RepositoryResolver(client, CacheStore(), console=console)
        try:
            repo_url = resolver.get_repository_url(software, org=org, user=user)
        except BhelmError as exc:
            fail(exc)

    try:
        installer.install(namespace, software, repo_url, version=version, values=values,
                          verbose=verbose, console=console)
    except BhelmError as exc:
        fail(exc, prefix="Installation failed")

    console.print("[green]Installation completed successfully![/green]")
