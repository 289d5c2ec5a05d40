"""Helm operations: add the resolved repository, refresh, install."""

from __future__ import annotations

import logging
import shutil
import subprocess

from rich.console import Console

from bhelm.config.settings import settings
from bhelm.core.errors import InstallError

logger = logging.getLogger(__name__)


def _run_helm(args: list[str], failure: str) -> str:
    cmd = [settings.helm_binary, *args]
    logger.debug("Running %s", " ".join(cmd))
    try:
        r = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as exc:
        raise InstallError(f"{failure}: {exc}") from exc
    if r.returncode != 0:
        detail = r.stderr.strip() or f"exit status {r.returncode}"
        raise InstallError(f"{failure}: {detail}")
    return r.stdout


def helm_available() -> bool:
    return shutil.which(settings.helm_binary) is not None


def install_args(namespace: str, software: str, version: str = "", values: str = "") -> list[str]:
    """Arguments for ``helm install``; the chart is addressed as ``software/software``."""
    args = ["install", software, f"{software}/{software}", "--namespace", namespace, "--create-namespace"]
    if version:
        args.extend(["--version", version])
    if values:
        args.extend(["--values", values])
    return args


def install(
    namespace: str,
    software: str,
    repo_url: str,
    version: str = "",
    values: str = "",
    verbose: bool = False,
    console: Console | None = None,
) -> None:
    console = console or Console()
    if not helm_available():
        raise InstallError(f"{settings.helm_binary} CLI not found")

    if verbose:
        console.print("Adding Helm repository...")
    _run_helm(["repo", "add", software, repo_url], "failed to add Helm repository")

    if verbose:
        console.print("Updating Helm repositories...")
    _run_helm(["repo", "update"], "failed to update Helm repositories")

    args = install_args(namespace, software, version=version, values=values)
    if verbose:
        console.print(f"Executing: {settings.helm_binary} {' '.join(args)}")
    output = _run_helm(args, "failed to install Helm package")
    if verbose and output.strip():
        console.print(output.rstrip(), highlight=False)
