"""Repository and package search models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RepositoryRecord:
    name: str = ""
    organization: str = ""
    url: str = ""
    verified: bool = False  # never persisted, only verified records are cached

    @classmethod
    def from_api(cls, d: dict) -> RepositoryRecord:
        """Build from an Artifact Hub repository object."""
        if not isinstance(d, dict) or not d:
            return cls()
        return cls(
            name=d.get("name") or "",
            organization=d.get("organization_name") or "",
            url=d.get("url") or "",
            verified=bool(d.get("verified_publisher", False)),
        )

    @classmethod
    def from_cache(cls, d: dict) -> RepositoryRecord:
        return cls(
            name=d.get("name", ""),
            organization=d.get("organization_name", ""),
            url=d.get("url", ""),
            verified=True,
        )

    def to_cache(self) -> dict[str, str]:
        return {
            "name": self.name,
            "organization_name": self.organization,
            "url": self.url,
        }


@dataclass
class PackageSearchResult:
    name: str = ""
    repository: RepositoryRecord = field(default_factory=RepositoryRecord)

    @property
    def organization(self) -> str:
        return self.repository.organization

    @property
    def url(self) -> str:
        return self.repository.url

    @classmethod
    def from_api(cls, d: dict) -> PackageSearchResult:
        return cls(
            name=d.get("name") or "",
            repository=RepositoryRecord.from_api(d.get("repository")),
        )
