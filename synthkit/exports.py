"""Export generated datasets to JSON and CSV.

Entity records are flattened with :func:`pandas.json_normalize`, so nested
fields such as ``address.city`` or ``payment_method_details.card.brand``
become dotted columns.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from synthkit.synthetic.assembler import Dataset

logger = logging.getLogger(__name__)

ENTITY_KINDS = ("customers", "plans", "subscriptions", "invoices", "charges")


def dataset_frames(dataset: Dataset) -> dict[str, pd.DataFrame]:
    """One flattened DataFrame per entity kind.

    Empty pools give an empty DataFrame.
    """
    payload = dataset.to_dict()
    return {
        kind: pd.json_normalize(payload[kind]) if payload[kind] else pd.DataFrame()
        for kind in ENTITY_KINDS
    }


def metrics_frame(dataset: Dataset) -> pd.DataFrame:
    """Presented metrics, one row each, without time series."""
    records = [
        {
            "name": metric.name,
            "category": metric.category,
            "type": metric.kind,
            "unit": metric.unit,
            "chart_type": metric.chart_type,
            "value": metric.value,
        }
        for metric in dataset.metrics
    ]
    return pd.DataFrame(
        records, columns=["name", "category", "type", "unit", "chart_type", "value"]
    )


def export_dataset_csv(dataset: Dataset, output_dir: str | Path) -> dict[str, Path]:
    """Write ``<kind>.csv`` for every non-empty entity kind.

    Parameters
    ----------
    dataset:
        Assembled dataset to export.
    output_dir:
        Directory to write into; created if missing.

    Returns
    -------
    dict[str, Path]
        Written file per entity kind.

    Examples
    --------
    >>> ds = generate_dataset("checkout-ecommerce", "early", 1)
    >>> export_dataset_csv(ds, "out/")["charges"]
    PosixPath('out/charges.csv')
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: dict[str, Path] = {}
    for kind, frame in dataset_frames(dataset).items():
        if frame.empty:
            continue
        path = output_dir / f"{kind}.csv"
        frame.to_csv(path, index=False)
        written[kind] = path

    logger.info(f"Exported {len(written)} entity tables to {output_dir}")
    return written


def export_dataset_json(
    dataset: Dataset, output_path: str | Path, indent: int | None = 2
) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dataset.to_json(indent=indent), encoding="utf-8")
    logger.info(f"Dataset exported to {output_path}")
    return output_path


def export_metrics_csv(dataset: Dataset, output_path: str | Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    metrics_frame(dataset).to_csv(output_path, index=False)
    logger.info(f"Metrics exported to {output_path}")
    return output_path
