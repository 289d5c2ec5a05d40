"""Shared CLI options and helpers."""

from __future__ import annotations

from typing import NoReturn

import typer

from bhelm.core.errors import BhelmError

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")


def fail(exc: BhelmError, prefix: str = "Error") -> NoReturn:
    """Report ``exc`` on stderr and exit with status 1."""
    typer.echo(f"{prefix}: {exc}", err=True)
    raise typer.Exit(code=1)
