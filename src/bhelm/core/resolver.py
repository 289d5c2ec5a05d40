"""Resolve a software name to exactly one Helm chart repository URL.

Fallback chain:

1. official repositories of ``--org`` from the local cache (refreshed on
   first use),
2. remote official-repository search by organization / user,
3. free-text package search on the software name.

A declined confirmation anywhere ends the resolution with
``OperationCancelledError``; it never moves on to the next tier.
"""

from __future__ import annotations

import logging

from rich.console import Console

from bhelm.core.cache_store import CacheStore
from bhelm.core.errors import (
    CacheCorruptError,
    EmptyResultError,
    NoOfficialRepositoryError,
    NoPackageFoundError,
    OperationCancelledError,
)
from bhelm.core.official import update_official_repositories
from bhelm.core.registry_client import RegistryClient
from bhelm.core.selector import Selector
from bhelm.models.repo import PackageSearchResult, RepositoryRecord

logger = logging.getLogger(__name__)


class RepositoryResolver:
    def __init__(
        self,
        client: RegistryClient,
        store: CacheStore,
        selector: Selector | None = None,
        console: Console | None = None,
        show_progress: bool = True,
    ):
        self.client = client
        self.store = store
        self.console = console or Console()
        self.selector = selector or Selector(console=self.console)
        self.show_progress = show_progress

    def get_repository_url(self, software: str, org: str = "", user: str = "") -> str:
        if org or user:
            try:
                url = self.search_official_repository(org, user)
            except NoOfficialRepositoryError:
                self.console.print("No official repository found, falling back to package search...")
            else:
                self.console.print(f"Official repository found: {url}")
                return url

        return self.search_package_fallback(software)

    def search_official_repository(self, org: str = "", user: str = "") -> str:
        if not self.store.exists():
            self.console.print("Local repository file not found. Updating repositories...")
            update_official_repositories(
                self.client, self.store, console=self.console, show_progress=self.show_progress,
            )

        if org:
            url = self._search_local(org)
            if url is not None:
                return url
            self.console.print("No local repository found. Falling back to remote search...")

        repos = self.client.search_by_org_or_user(org, user)
        if not repos:
            raise NoOfficialRepositoryError()
        if len(repos) == 1:
            self.console.print(f"Found remote official repository: {repos[0].url}")
            return repos[0].url

        self.console.print("Multiple repositories found remotely. Please select one:")
        return self._choose_and_confirm(repos)

    def _search_local(self, org: str) -> str | None:
        """Return a URL from the cache, or None when it has nothing for ``org``."""
        self.console.print(f"Searching for official repository locally for organization: {org}...")
        try:
            repos = self.store.get_by_organization(org)
        except EmptyResultError:
            return None
        except CacheCorruptError as exc:
            logger.warning("Ignoring unreadable repository cache: %s", exc)
            return None

        if len(repos) == 1:
            self.console.print(f"Found local official repository: {repos[0].url}")
            return repos[0].url

        self.console.print("Multiple repositories found. Please select one:")
        return self._choose_and_confirm(repos)

    def _choose_and_confirm(self, repos: list[RepositoryRecord]) -> str:
        selected = repos[self.selector.choose(repos)]
        self.console.print(f"You selected: {selected.name} (URL: {selected.url})")
        if not self.selector.confirm():
            raise OperationCancelledError()
        return selected.url

    def search_package_fallback(self, software: str) -> str:
        packages = self.client.search_packages_by_name(software)
        if not packages:
            raise NoPackageFoundError()

        matches: list[PackageSearchResult] = [p for p in packages if software in p.name]

        if len(matches) == 1:
            match = matches[0]
            self.console.print(f"Match found: {match.name} (Repository URL: {match.url})")
            if not self.selector.confirm():
                raise OperationCancelledError()
            return match.url

        # Picking from a list is taken as the operator's answer; no extra confirmation.
        if matches:
            self.console.print("Multiple matches found. Please select a package from the list below:")
            return matches[self.selector.choose(matches)].url

        self.console.print("No exact or partial match found. Please select a package from the list below:")
        return packages[self.selector.choose(packages)].url
