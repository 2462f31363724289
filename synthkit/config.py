"""Environment-driven settings shared by the CLI and the MCP server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_DATA_DIR = "datasets"
DEFAULT_BASE_URL = "http://localhost:3001"
DEFAULT_CACHE_SIZE = 100
DEFAULT_CACHE_TTL_SECONDS = 3600


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    Attributes
    ----------
    data_dir:
        Directory where published datasets are written as ``<id>.json``.
    base_url:
        Public base URL used to build dataset download links.
    metric_availability_path:
        Optional JSON file replacing the packaged metric availability table.
    cache_size:
        Maximum number of generated datasets kept in the server cache.
    cache_ttl_seconds:
        Lifetime of a cached dataset.
    """

    data_dir: Path = Path(DEFAULT_DATA_DIR)
    base_url: str = DEFAULT_BASE_URL
    metric_availability_path: Optional[Path] = None
    cache_size: int = DEFAULT_CACHE_SIZE
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS

    def __post_init__(self) -> None:
        if self.cache_size <= 0:
            raise ValueError(f"cache_size must be positive: {self.cache_size}")
        if self.cache_ttl_seconds <= 0:
            raise ValueError(
                f"cache_ttl_seconds must be positive: {self.cache_ttl_seconds}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        availability = env.get("SYNTHKIT_METRIC_AVAILABILITY")
        return cls(
            data_dir=Path(env.get("SYNTHKIT_DATA_DIR", DEFAULT_DATA_DIR)),
            base_url=env.get("SYNTHKIT_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            metric_availability_path=Path(availability) if availability else None,
            cache_size=int(env.get("SYNTHKIT_CACHE_SIZE", DEFAULT_CACHE_SIZE)),
            cache_ttl_seconds=int(
                env.get("SYNTHKIT_CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS)
            ),
        )
