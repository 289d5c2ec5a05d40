"""Application configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_API_URL = "https://artifacthub.io/api/v1"
DEFAULT_CACHE_FILE = "official_repos.json"


def _default_cache_file() -> Path:
    """Return the official repositories cache path.

    BHELM_CACHE_FILE wins; otherwise the file lives in the working directory.
    """
    override = os.environ.get("BHELM_CACHE_FILE", "")
    if override:
        return Path(override)
    return Path(DEFAULT_CACHE_FILE)


def _default_api_url() -> str:
    return os.environ.get("BHELM_API_URL", "") or DEFAULT_API_URL


def _default_request_timeout() -> float:
    raw = os.environ.get("BHELM_REQUEST_TIMEOUT", "")
    if raw:
        try:
            return float(raw)
        except ValueError:
            pass
    return 30.0


@dataclass
class Settings:
    cache_file: Path = field(default_factory=_default_cache_file)
    api_url: str = field(default_factory=_default_api_url)
    request_timeout: float = field(default_factory=_default_request_timeout)
    helm_binary: str = field(default_factory=lambda: os.environ.get("HELM_BINARY", "") or "helm")
    page_size: int = 50
    org_search_limit: int = 10
    rate_limit_wait: float = 1.0  # seconds, per 429 response
    page_pause: float = 1.0  # seconds between catalog pages


# Global singleton
settings = Settings()
