"""Business type lookup tables, metric availability and classification."""

from .classification import KeywordRule, classify_business_type
from .profiles import (
    AmountRange,
    BusinessProfile,
    BusinessTypeRegistry,
    MetricAvailability,
    PropertySpec,
    default_registry,
    load_metric_availability,
    load_registry,
)

__all__ = [
    "AmountRange",
    "BusinessProfile",
    "BusinessTypeRegistry",
    "KeywordRule",
    "MetricAvailability",
    "PropertySpec",
    "classify_business_type",
    "default_registry",
    "load_metric_availability",
    "load_registry",
]
