"""Error types raised by the dataset generator and its storage layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from synthkit.synthetic.assembler import Dataset


class SynthkitError(Exception):
    """Base class for all synthkit errors."""


class InvalidArgumentError(SynthkitError, ValueError):
    """A caller passed a value outside the documented contract.

    Examples are negative record counts or an unknown stage name.
    """


class InconsistentStateError(SynthkitError, RuntimeError):
    """A dependent entity was requested but its required parent pool is empty."""


class DatasetStoreError(SynthkitError, OSError):
    """Saving or loading a dataset blob failed.

    When a freshly generated dataset could not be saved, ``dataset`` holds
    it so the caller can still use it.
    """

    def __init__(
        self,
        message: str,
        *,
        dataset_id: Optional[str] = None,
        dataset: Optional[Dataset] = None,
    ) -> None:
        super().__init__(message)
        self.dataset_id = dataset_id
        self.dataset = dataset
