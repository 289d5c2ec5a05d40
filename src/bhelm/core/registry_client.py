"""Artifact Hub search API client."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import httpx

from bhelm.config.settings import settings
from bhelm.core.errors import InvalidArgumentError, RegistryError
from bhelm.models.repo import PackageSearchResult, RepositoryRecord

logger = logging.getLogger(__name__)

HELM_KIND = 0  # Artifact Hub repository kind for Helm charts

RateLimitCallback = Callable[[int], None]


class RegistryClient:
    """Thin synchronous wrapper around the Artifact Hub search endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._sleep = sleep
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- HTTP plumbing ------------------------------------------------------

    def _send(self, path: str, params: dict[str, Any]) -> httpx.Response:
        try:
            return self._http.get(path, params=params)
        except httpx.HTTPError as exc:
            raise RegistryError(f"request to {path} failed: {exc}") from exc

    @staticmethod
    def _decode(resp: httpx.Response, what: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise RegistryError(f"failed to decode {what} response: {exc}") from exc

    @staticmethod
    def _packages_from(body: Any) -> list[dict]:
        if body is None:
            return []
        if not isinstance(body, dict):
            raise RegistryError("unexpected package search response: expected an object")
        return body.get("packages") or []

    # -- searches -----------------------------------------------------------

    def search_by_org_or_user(self, org: str = "", user: str = "") -> list[RepositoryRecord]:
        """Search official Helm repositories owned by an organization or user."""
        if not org and not user:
            raise InvalidArgumentError("organization or user must be specified")

        params = {
            "offset": 0,
            "limit": settings.org_search_limit,
            "kind": HELM_KIND,
            "official": "true",
            "user": user,
            "org": org,
        }
        resp = self._send("/repositories/search", params)
        if resp.status_code != httpx.codes.OK:
            raise RegistryError(
                f"failed to fetch repository: status code {resp.status_code}",
                status_code=resp.status_code,
            )

        body = self._decode(resp, "repository search")
        if body is None:
            return []
        if not isinstance(body, list):
            raise RegistryError("unexpected repository search response: expected an array")
        return [RepositoryRecord.from_api(d) for d in body if isinstance(d, dict)]

    def search_packages_by_name(self, text: str) -> list[PackageSearchResult]:
        """Free-text search over verified, official, non-deprecated charts."""
        params = {
            "ts_query_web": text,
            "kind": HELM_KIND,
            "verified_publisher": "true",
            "official": "true",
            "deprecated": "false",
        }
        resp = self._send("/packages/search", params)
        if resp.status_code != httpx.codes.OK:
            raise RegistryError(
                f"failed to fetch package: status code {resp.status_code}",
                status_code=resp.status_code,
            )

        packages = self._packages_from(self._decode(resp, "package search"))
        return [PackageSearchResult.from_api(p) for p in packages if isinstance(p, dict)]

    def fetch_all_verified_repositories(
        self, on_rate_limit: RateLimitCallback | None = None,
    ) -> list[RepositoryRecord]:
        """Walk the whole official catalog and collect its verified repositories.

        Pages until one comes back empty.  Repositories are deduplicated by
        name, later pages overwriting earlier ones.  A 429 pauses and retries
        the same page with no retry limit.
        """
        page_size = settings.page_size
        repositories: dict[str, RepositoryRecord] = {}
        page = 0

        while True:
            params = {
                "kind": HELM_KIND,
                "verified_publisher": "true",
                "official": "true",
                "limit": page_size,
                "offset": page * page_size,
            }
            resp = self._send("/packages/search", params)

            if resp.status_code == httpx.codes.TOO_MANY_REQUESTS:
                logger.debug("Rate limited on page %d, waiting %.1fs", page, settings.rate_limit_wait)
                if on_rate_limit:
                    on_rate_limit(page)
                self._sleep(settings.rate_limit_wait)
                continue

            if resp.status_code != httpx.codes.OK:
                raise RegistryError(
                    f"failed to fetch packages: status code {resp.status_code}",
                    status_code=resp.status_code,
                )

            packages = self._packages_from(self._decode(resp, "catalog page"))
            if not packages:
                break

            for pkg in packages:
                if not isinstance(pkg, dict):
                    continue
                repo = RepositoryRecord.from_api(pkg.get("repository"))
                if repo.verified and repo.organization:
                    repositories[repo.name] = repo

            logger.debug("Catalog page %d: %d packages, %d unique repositories so far",
                         page, len(packages), len(repositories))
            page += 1
            self._sleep(settings.page_pause)

        return list(repositories.values())
