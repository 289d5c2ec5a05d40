"""Local snapshot of official (verified, organization-owned) repositories."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from bhelm.config.settings import settings
from bhelm.core.errors import CacheCorruptError, CacheNotFoundError, CacheWriteError, EmptyResultError
from bhelm.models.repo import RepositoryRecord

logger = logging.getLogger(__name__)


class CacheStore:
    """Reads and replaces the flat JSON cache of official repositories.

    The file is an array of ``{name, organization_name, url}`` objects.  It is
    never patched in place: a refresh rewrites it wholesale.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else settings.cache_file

    def exists(self) -> bool:
        return self.path.is_file()

    def load_all(self) -> list[RepositoryRecord]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError as exc:
            raise CacheNotFoundError(
                f"official repositories file not found: {self.path}"
            ) from exc
        except OSError as exc:
            raise CacheCorruptError(
                f"failed to read official repositories file {self.path}: {exc}"
            ) from exc

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise CacheCorruptError(
                f"failed to parse official repositories file {self.path}: {exc}"
            ) from exc

        if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
            raise CacheCorruptError(
                f"official repositories file {self.path} is not a JSON array of objects"
            )
        return [RepositoryRecord.from_cache(d) for d in data]

    @staticmethod
    def filter_by_organization(
        records: list[RepositoryRecord], org: str,
    ) -> list[RepositoryRecord]:
        """Exact, case-sensitive match on the organization name."""
        matches = [r for r in records if r.organization == org]
        if not matches:
            raise EmptyResultError(f"no repositories found for organization: {org}")
        return matches

    def get_by_organization(self, org: str) -> list[RepositoryRecord]:
        return self.filter_by_organization(self.load_all(), org)

    def replace_all(self, records: list[RepositoryRecord]) -> None:
        """Overwrite the cache with ``records``.

        Written to a sibling temp file and renamed into place so readers never
        see a partial document.
        """
        payload = json.dumps([r.to_cache() for r in records], indent=2, ensure_ascii=False)
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            raise CacheWriteError(
                f"failed to write official repositories file {self.path}: {exc}"
            ) from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.debug("Wrote %d repositories to %s", len(records), self.path)
