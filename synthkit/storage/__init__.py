"""Persistence for published datasets."""

from .dataset_store import (
    DatasetStore,
    PublishResult,
    compute_checksum,
    scenario_dataset_id,
)

__all__ = ["DatasetStore", "PublishResult", "compute_checksum", "scenario_dataset_id"]
