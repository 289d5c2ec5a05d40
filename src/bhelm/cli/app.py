"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="bhelm",
    help="bhelm simplifies Kubernetes application installation with Helm.",
    no_args_is_help=True,
)


@app.callback()
def root(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging on stderr"),
) -> None:
    if debug:
        from rich.console import Console
        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _register_commands() -> None:
    from bhelm.cli.commands.install_cmd import app as install_app
    from bhelm.cli.commands.official_cmd import app as official_app

    app.add_typer(install_app, name="install", help="Install a Kubernetes application using Helm")
    app.add_typer(official_app, name="official", help="Manage the list of official repositories")


_register_commands()


def main() -> None:
    app()
