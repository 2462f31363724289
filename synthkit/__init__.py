"""Synthkit: deterministic synthetic Stripe-shaped business datasets."""

from synthkit.exceptions import (
    DatasetStoreError,
    InconsistentStateError,
    InvalidArgumentError,
    SynthkitError,
)
from synthkit.synthetic.assembler import (
    Dataset,
    DatasetCounts,
    GenerationConfig,
    assemble,
    generate_dataset,
)
from synthkit.synthetic.stage import Stage

__version__ = "0.1.0"

__all__ = [
    "Dataset",
    "DatasetCounts",
    "DatasetStoreError",
    "GenerationConfig",
    "InconsistentStateError",
    "InvalidArgumentError",
    "Stage",
    "SynthkitError",
    "assemble",
    "generate_dataset",
]
