"""File-backed store for published datasets.

Each dataset is written as ``<data_dir>/<id>.json`` inside an envelope::

    {"id": ..., "type": "scenario", "data": {...},
     "metadata": {"createdAt": ..., "checksum": ..., "scenario": {...}}}

and served from ``<base_url>/datasets/<id>.json``.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from synthkit.config import DEFAULT_BASE_URL, Settings
from synthkit.exceptions import DatasetStoreError, InvalidArgumentError
from synthkit.registry.profiles import BusinessTypeRegistry, default_registry
from synthkit.synthetic.assembler import GenerationConfig, assemble
from synthkit.synthetic.stage import Stage

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.strip().lower()).strip("-")


def scenario_dataset_id(business_type: str, role: str, stage: Stage | str, seed: int) -> str:
    """Deterministic id ``scenario-<type>-<role>-<stage>-<seed>``.

    Examples
    --------
    >>> scenario_dataset_id("b2b-saas-subscriptions", "Founder", "growth", 12345)
    'scenario-b2b-saas-subscriptions-founder-growth-12345'
    """
    stage_value = Stage.parse(stage).value
    role_slug = _slug(role) or "default"
    return f"scenario-{_slug(business_type)}-{role_slug}-{stage_value}-{seed}"


def compute_checksum(data: Any) -> str:
    """md5 hex digest of the canonical (sorted-key) JSON encoding of ``data``."""
    canonical = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.md5(canonical.encode("utf-8"), usedforsecurity=False).hexdigest()


@dataclass(frozen=True)
class PublishResult:
    id: str
    url: str
    created: bool


class DatasetStore:
    """Key-value blob store for dataset envelopes."""

    def __init__(self, data_dir: str | Path, base_url: str = DEFAULT_BASE_URL) -> None:
        self.data_dir = Path(data_dir)
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DatasetStore":
        settings = settings or Settings.from_env()
        return cls(settings.data_dir, settings.base_url)

    def path_for(self, dataset_id: str) -> Path:
        if not isinstance(dataset_id, str) or not _ID_PATTERN.match(dataset_id):
            raise InvalidArgumentError(f"Invalid dataset id: {dataset_id!r}")
        return self.data_dir / f"{dataset_id}.json"

    def url_for(self, dataset_id: str) -> str:
        self.path_for(dataset_id)
        return f"{self.base_url}/datasets/{dataset_id}.json"

    def exists(self, dataset_id: str) -> bool:
        return self.path_for(dataset_id).is_file()

    def save(
        self,
        dataset_id: str,
        data: dict[str, Any],
        *,
        dataset_type: str = "scenario",
        metadata: Optional[dict[str, Any]] = None,
        created_at: Optional[datetime] = None,
    ) -> str:
        """Write ``data`` under ``dataset_id`` and return its URL.

        Raises
        ------
        DatasetStoreError
            If the file cannot be written.
        """
        path = self.path_for(dataset_id)
        created_at = created_at or datetime.now(timezone.utc)
        envelope = {
            "id": dataset_id,
            "type": dataset_type,
            "data": data,
            "metadata": {
                **(metadata or {}),
                "createdAt": created_at.isoformat(),
                "checksum": compute_checksum(data),
            },
        }

        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(envelope, f, indent=2, sort_keys=True)
            os.replace(tmp_path, path)
        except OSError as e:
            raise DatasetStoreError(f"Failed to save dataset {dataset_id}: {e}") from e

        logger.info(f"Dataset {dataset_id} saved to {path}")
        return self.url_for(dataset_id)

    def load(self, dataset_id: str) -> Optional[dict[str, Any]]:
        """Return the stored envelope, or ``None`` if no such dataset exists.

        A checksum mismatch is logged as a warning and the envelope is still
        returned.

        Raises
        ------
        DatasetStoreError
            If the file exists but cannot be read or parsed.
        """
        path = self.path_for(dataset_id)
        if not path.is_file():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                envelope = json.load(f)
        except OSError as e:
            raise DatasetStoreError(f"Failed to read dataset {dataset_id}: {e}") from e
        except json.JSONDecodeError as e:
            raise DatasetStoreError(f"Dataset {dataset_id} is not valid JSON: {e}") from e

        if not isinstance(envelope, dict) or "data" not in envelope:
            raise DatasetStoreError(f"Dataset {dataset_id} has no data envelope")

        expected = envelope.get("metadata", {}).get("checksum")
        actual = compute_checksum(envelope["data"])
        if expected != actual:
            logger.warning(
                f"Checksum mismatch for dataset {dataset_id}: "
                f"expected {expected}, got {actual}"
            )
        return envelope

    def list_ids(self) -> list[str]:
        if not self.data_dir.is_dir():
            return []
        try:
            return sorted(p.stem for p in self.data_dir.glob("*.json") if p.is_file())
        except OSError as e:
            raise DatasetStoreError(f"Failed to list datasets: {e}") from e

    def delete(self, dataset_id: str) -> bool:
        path = self.path_for(dataset_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise DatasetStoreError(f"Failed to delete dataset {dataset_id}: {e}") from e
        logger.info(f"Dataset {dataset_id} deleted")
        return True

    def publish_scenario(
        self,
        config: GenerationConfig,
        role: str = "default",
        registry: Optional[BusinessTypeRegistry] = None,
    ) -> PublishResult:
        """Generate and save the dataset for ``config`` unless it is already stored.

        The id only covers business type, role, stage and seed, so an
        existing file is reused even when the counts differ.

        Raises
        ------
        DatasetStoreError
            If the generated dataset cannot be saved. The error carries the
            dataset and its id.
        """
        registry = registry or default_registry()
        business_type = registry.canonical_key(config.business_type)
        dataset_id = scenario_dataset_id(business_type, role, config.stage, config.seed)

        if self.exists(dataset_id):
            logger.info(f"Dataset {dataset_id} already published")
            return PublishResult(dataset_id, self.url_for(dataset_id), created=False)

        dataset = assemble(config, registry)
        try:
            url = self.save(
                dataset_id,
                dataset.to_dict(),
                metadata={
                    "scenario": {
                        "category": business_type,
                        "role": role,
                        "stage": config.stage.value,
                        "id": config.seed,
                    }
                },
            )
        except DatasetStoreError as e:
            logger.error(f"Dataset {dataset_id} was generated but not saved: {e}")
            raise DatasetStoreError(str(e), dataset_id=dataset_id, dataset=dataset) from e
        return PublishResult(dataset_id, url, created=True)
