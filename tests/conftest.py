"""
Shared test fixtures and helpers.
"""

import io
from collections import deque
from pathlib import Path

import pytest
from rich.console import Console

from bhelm.core.cache_store import CacheStore
from bhelm.core.selector import Selector
from bhelm.models.repo import PackageSearchResult, RepositoryRecord


class ScriptedPrompter:
    """Prompter that replays canned answers, then behaves like closed stdin."""

    def __init__(self, *answers: str):
        self.answers = deque(answers)
        self.prompts: list[str] = []

    def ask(self, message: str) -> str:
        self.prompts.append(message)
        if not self.answers:
            raise EOFError
        return self.answers.popleft()


class FakeRegistryClient:
    """In-memory stand-in for RegistryClient used by resolver tests."""

    def __init__(self, org_results=None, packages=None, catalog=None):
        self.org_results = org_results or []
        self.packages = packages or []
        self.catalog = catalog or []
        self.calls: list[tuple] = []

    def search_by_org_or_user(self, org="", user=""):
        self.calls.append(("org", org, user))
        return list(self.org_results)

    def search_packages_by_name(self, text):
        self.calls.append(("packages", text))
        return list(self.packages)

    def fetch_all_verified_repositories(self, on_rate_limit=None):
        self.calls.append(("catalog",))
        return list(self.catalog)


def repo(name: str, org: str, url: str | None = None, verified: bool = True) -> RepositoryRecord:
    return RepositoryRecord(name=name, organization=org, url=url or f"https://{name}.example.com/charts",
                            verified=verified)


def package(name: str, repo_name: str, org: str = "acme") -> PackageSearchResult:
    return PackageSearchResult(name=name, repository=repo(repo_name, org))


@pytest.fixture
def quiet_console() -> Console:
    """A console whose output is discarded."""
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "official_repos.json"


@pytest.fixture
def store(cache_path: Path) -> CacheStore:
    return CacheStore(cache_path)


@pytest.fixture
def make_selector(quiet_console):
    def _make(*answers: str) -> tuple[Selector, ScriptedPrompter]:
        prompter = ScriptedPrompter(*answers)
        return Selector(prompter=prompter, console=quiet_console), prompter
    return _make
