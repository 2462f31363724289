"""MCP tools for Synthkit datasets."""

from .datasets import load_dataset, publish_dataset
from .generation import detect_business_type, generate_dataset
from .health_check import health_check

__all__ = [
    "detect_business_type",
    "generate_dataset",
    "health_check",
    "load_dataset",
    "publish_dataset",
]
