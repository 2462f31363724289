"""Business metrics and the dashboard metric catalog."""

from .business_metrics import (
    BusinessMetrics,
    calculate_business_metrics,
    calculate_conversion_rate,
    calculate_customer_lifetime_value,
    calculate_subscriber_lifetime_value,
    safe_divide,
)
from .catalog import (
    BPS,
    METRIC_DEFINITIONS,
    MetricData,
    MetricDefinition,
    TimeSeries,
    build_metric_catalog,
    generate_time_series,
    presented_metrics,
)

__all__ = [
    "BusinessMetrics",
    "calculate_business_metrics",
    "calculate_conversion_rate",
    "calculate_customer_lifetime_value",
    "calculate_subscriber_lifetime_value",
    "safe_divide",
    "BPS",
    "METRIC_DEFINITIONS",
    "MetricData",
    "MetricDefinition",
    "TimeSeries",
    "build_metric_catalog",
    "generate_time_series",
    "presented_metrics",
]
