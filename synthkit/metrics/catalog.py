"""Presentation catalog of dashboard metrics with seasonal time series.

Every definition is evaluated for every business type; the availability
flag decides only whether the metric is shown.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from synthkit.metrics.business_metrics import BusinessMetrics
from synthkit.registry.profiles import BusinessProfile, MetricAvailability
from synthkit.synthetic.prng import seeded_random

logger = logging.getLogger(__name__)

CALCULATED = "calculated"
SYNTHESIZED = "synthesized"

VOLUME = "volume"
COUNT = "count"
RATE = "rate"
BPS = "bps"
UNITS = (VOLUME, COUNT, RATE, BPS)

SUM = "sum"
AVERAGE = "average"

DAILY_POINTS = 365
WEEKLY_POINTS = 52
MONTHLY_POINTS = 12

SYNTHESIZED_SALT = 700
TIME_SERIES_SALT = 500
TIME_SERIES_STRIDE = 1000
NOISE_SPREAD = 0.3


@dataclass(frozen=True)
class MetricDefinition:
    """How to obtain one metric.

    Sourced metrics read ``source`` from :class:`BusinessMetrics`, scaled by
    ``factor`` and floored for counts; the rest draw a seeded value inside
    ``synth_range``.
    """

    name: str
    category: str
    kind: str
    unit: str
    chart_type: str
    aggregation: str
    availability_flag: Optional[str] = None
    source: Optional[str] = None
    synth_range: Optional[tuple[float, float]] = None
    factor: float = 1.0

    def __post_init__(self) -> None:
        if (self.source is None) == (self.synth_range is None):
            raise ValueError(f"{self.name}: set exactly one of source or synth_range")
        if self.unit not in UNITS:
            raise ValueError(f"{self.name}: unknown unit {self.unit}")
        if self.factor < 0 or (self.source is None and self.factor != 1.0):
            raise ValueError(f"{self.name}: factor needs a source and must be >= 0")
        if self.aggregation not in (SUM, AVERAGE):
            raise ValueError(f"{self.name}: unknown aggregation {self.aggregation}")
        if self.availability_flag is not None and (
            self.availability_flag not in MetricAvailability.FLAGS
        ):
            raise ValueError(f"{self.name}: unknown flag {self.availability_flag}")


# fmt: off
METRIC_DEFINITIONS: tuple[MetricDefinition, ...] = (
    MetricDefinition("Gross Payment Volume", "Payments", CALCULATED, VOLUME, "line", SUM, source="gross_payment_volume"),
    MetricDefinition("Payment Success Rate", "Payments", CALCULATED, RATE, "line", AVERAGE, source="payment_success_rate"),
    MetricDefinition("Successful Payments", "Payments", CALCULATED, COUNT, "bar", SUM, source="successful_payments"),
    MetricDefinition("Accepted Volume", "Payments", CALCULATED, VOLUME, "bar", SUM, source="gross_payment_volume"),
    MetricDefinition("Accepted Payments", "Payments", CALCULATED, COUNT, "bar", SUM, source="successful_payments"),
    MetricDefinition("Failed Card Payments - Failed Volume", "Payments", CALCULATED, VOLUME, "bar", SUM, source="failed_payment_volume"),
    MetricDefinition("Failed Card Payments - Failed Count", "Payments", CALCULATED, COUNT, "bar", SUM, source="failed_payments"),
    MetricDefinition("Failed Card Payments - Failure Rate", "Payments", CALCULATED, RATE, "line", AVERAGE, source="payment_failure_rate"),
    MetricDefinition("Average Order Value", "Revenue", CALCULATED, VOLUME, "line", AVERAGE, source="average_order_value"),
    MetricDefinition("Total Customers", "Customers", CALCULATED, COUNT, "line", AVERAGE, source="total_customers"),
    MetricDefinition("New Customers", "Customers", CALCULATED, COUNT, "line", SUM, source="total_customers"),
    MetricDefinition("Spend per Customer", "Customers", CALCULATED, VOLUME, "line", AVERAGE, source="spend_per_customer"),
    MetricDefinition("Account Growth - New Accounts", "Customers", CALCULATED, COUNT, "line", SUM, source="total_customers"),
    MetricDefinition("Monthly Recurring Revenue (MRR)", "Revenue", CALCULATED, VOLUME, "line", AVERAGE, "subscriptions", source="monthly_recurring_revenue"),
    MetricDefinition("Active Subscribers", "Subscriptions", CALCULATED, COUNT, "line", AVERAGE, "subscriptions", source="active_subscriptions"),
    MetricDefinition("New Subscribers", "Subscriptions", CALCULATED, COUNT, "line", SUM, "subscriptions", source="total_subscriptions"),
    MetricDefinition("Churned Subscribers", "Subscriptions", CALCULATED, COUNT, "line", SUM, "subscriptions", source="canceled_subscriptions"),
    MetricDefinition("New Trials", "Subscriptions", CALCULATED, COUNT, "line", SUM, "subscriptions", source="trialing_subscriptions"),
    MetricDefinition("Active Trials", "Subscriptions", CALCULATED, COUNT, "line", AVERAGE, "subscriptions", source="trialing_subscriptions"),
    MetricDefinition("Subscriber Churn Rate", "Subscriptions", CALCULATED, RATE, "line", AVERAGE, "subscriptions", source="churn_rate"),
    MetricDefinition("Invoices List", "Invoices", CALCULATED, VOLUME, "table", SUM, source="invoice_volume"),
    MetricDefinition("Past Due Invoices", "Invoices", CALCULATED, VOLUME, "table", AVERAGE, source="past_due_invoice_volume"),
    MetricDefinition("Average Revenue Per User (ARPU)", "Subscriptions", SYNTHESIZED, VOLUME, "line", AVERAGE, "subscriptions", source="average_revenue_per_user"),
    MetricDefinition("Subscriber Lifetime Value", "Subscriptions", SYNTHESIZED, VOLUME, "line", AVERAGE, "subscriptions", source="subscriber_lifetime_value"),
    MetricDefinition("Churned Revenue", "Subscriptions", SYNTHESIZED, VOLUME, "line", SUM, "subscriptions", source="churned_revenue"),
    MetricDefinition("Gross MRR Churn Rate", "Subscriptions", SYNTHESIZED, RATE, "line", AVERAGE, "subscriptions", source="churn_rate"),
    MetricDefinition("Net MRR Churn Rate", "Subscriptions", SYNTHESIZED, RATE, "line", AVERAGE, "subscriptions", source="churn_rate", factor=0.8),
    MetricDefinition("Customer Lifetime Value", "Customers", SYNTHESIZED, VOLUME, "bar", AVERAGE, source="customer_lifetime_value"),
    MetricDefinition("Conversion Rate", "Customers", SYNTHESIZED, RATE, "line", AVERAGE, source="conversion_rate"),
    MetricDefinition("Net Volume", "Payments", SYNTHESIZED, VOLUME, "line", SUM, source="attempted_payment_volume", factor=0.85),
    MetricDefinition("Net Volume from Sales", "Payments", SYNTHESIZED, VOLUME, "line", SUM, source="attempted_payment_volume", factor=0.82),
    MetricDefinition("Margin", "Revenue", SYNTHESIZED, VOLUME, "line", SUM, source="attempted_payment_volume", factor=0.15),
    MetricDefinition("Payment Take Rate", "Revenue", SYNTHESIZED, BPS, "line", AVERAGE, synth_range=(270.0, 310.0)),
    MetricDefinition("High Risk Blocks", "Fraud & risk", SYNTHESIZED, RATE, "bar", AVERAGE, "radar", synth_range=(0.003, 0.008)),
    MetricDefinition("Rule Blocks", "Fraud & risk", SYNTHESIZED, RATE, "bar", AVERAGE, "radar", synth_range=(0.0005, 0.002)),
    MetricDefinition("Total Radar Block Rate", "Fraud & risk", SYNTHESIZED, RATE, "line", AVERAGE, "radar", synth_range=(0.005, 0.02)),
    MetricDefinition("Fraudulent Disputes", "Fraud & risk", SYNTHESIZED, RATE, "line", AVERAGE, "disputes", synth_range=(0.0005, 0.002)),
    MetricDefinition("Early Fraud Warnings", "Fraud & risk", SYNTHESIZED, RATE, "line", AVERAGE, "disputes", synth_range=(0.001, 0.003)),
    MetricDefinition("Other Disputes", "Fraud & risk", SYNTHESIZED, RATE, "line", AVERAGE, "disputes", synth_range=(0.001, 0.004)),
    MetricDefinition("Total Dispute Rate", "Fraud & risk", SYNTHESIZED, RATE, "line", AVERAGE, "disputes", synth_range=(0.001, 0.01)),
    MetricDefinition("Dispute Activity", "Payments", SYNTHESIZED, RATE, "line", AVERAGE, "disputes", synth_range=(0.003, 0.007)),
    MetricDefinition("Dispute Count", "Payments", SYNTHESIZED, COUNT, "line", SUM, "disputes", source="total_payments", factor=0.005),
    MetricDefinition("Refund Rate", "Payments", SYNTHESIZED, RATE, "line", AVERAGE, "refunds", synth_range=(0.01, 0.05)),
    MetricDefinition("Refund Volume", "Payments", SYNTHESIZED, VOLUME, "line", SUM, "refunds", source="attempted_payment_volume", factor=0.05),
    MetricDefinition("Authentication Rate", "Authentication", SYNTHESIZED, RATE, "line", AVERAGE, "authentication", synth_range=(0.85, 0.97)),
    MetricDefinition("Authentication Success Rate", "Authentication", SYNTHESIZED, RATE, "line", AVERAGE, "authentication", synth_range=(0.92, 0.98)),
    MetricDefinition("Challenge Rate", "Authentication", SYNTHESIZED, RATE, "line", AVERAGE, "authentication", synth_range=(0.01, 0.02)),
    MetricDefinition("Challenge Success Rate", "Authentication", SYNTHESIZED, RATE, "line", AVERAGE, "authentication", synth_range=(0.85, 0.95)),
    MetricDefinition("3DS Requests", "Authentication", SYNTHESIZED, COUNT, "bar", SUM, "authentication", source="total_payments", factor=0.02),
    MetricDefinition("Successful 3DS Requests", "Authentication", SYNTHESIZED, COUNT, "bar", SUM, "authentication", source="total_payments", factor=0.019),
    MetricDefinition("3DS Failures", "Authentication", SYNTHESIZED, COUNT, "bar", SUM, "authentication", source="total_payments", factor=0.001),
)
# fmt: on


@dataclass(frozen=True)
class TimeSeries:
    start_date: date
    daily: tuple[float, ...]
    weekly: tuple[float, ...]
    monthly: tuple[float, ...]

    def as_dict(self) -> dict[str, object]:
        return {
            "startDate": self.start_date.isoformat(),
            "daily": list(self.daily),
            "weekly": list(self.weekly),
            "monthly": list(self.monthly),
        }


@dataclass(frozen=True)
class MetricData:
    name: str
    category: str
    kind: str
    unit: str
    chart_type: str
    value: float
    available: bool
    time_series: Optional[TimeSeries] = None

    def as_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "category": self.category,
            "type": self.kind,
            "unit": self.unit,
            "chartType": self.chart_type,
            "value": self.value,
            "available": self.available,
            "timeSeries": self.time_series.as_dict() if self.time_series else None,
        }


def _round(value: float, unit: str) -> float:
    return round(value, 4 if unit == RATE else 2)


def _aggregate(values: Sequence[float], aggregation: str) -> float:
    if not values:
        return 0.0
    total = sum(values)
    return total if aggregation == SUM else total / len(values)


def generate_time_series(
    value: float,
    definition: MetricDefinition,
    profile: BusinessProfile,
    seed: int,
    reference_time: datetime,
) -> TimeSeries:
    """Spread ``value`` over the 365 days before ``reference_time``.

    Each day gets the profile's month and weekday multipliers plus seeded
    noise. Flows (``sum``) are split so the daily points add up to roughly
    ``value``; levels and rates (``average``) hover around it. Weekly and
    monthly points aggregate the daily ones the same way.
    """
    end = reference_time.date()
    start = end - timedelta(days=DAILY_POINTS)
    base = value / DAILY_POINTS if definition.aggregation == SUM else value

    days: list[date] = []
    daily: list[float] = []
    for offset in range(DAILY_POINTS):
        day = start + timedelta(days=offset)
        noise = 1 - NOISE_SPREAD / 2 + NOISE_SPREAD * seeded_random(
            seed + TIME_SERIES_SALT + offset * TIME_SERIES_STRIDE
        )
        point = (
            base
            * profile.monthly_seasonality[day.month - 1]
            * profile.weekday_seasonality[day.weekday()]
            * noise
        )
        if definition.unit == RATE:
            point = min(max(point, 0.0), 1.0)
        days.append(day)
        daily.append(_round(point, definition.unit))

    recent = daily[-WEEKLY_POINTS * 7 :]
    weekly = [
        _round(_aggregate(recent[i : i + 7], definition.aggregation), definition.unit)
        for i in range(0, len(recent), 7)
    ]

    by_month: dict[tuple[int, int], list[float]] = {}
    for day, point in zip(days, daily):
        by_month.setdefault((day.year, day.month), []).append(point)
    monthly = [
        _round(_aggregate(points, definition.aggregation), definition.unit)
        for points in list(by_month.values())[-MONTHLY_POINTS:]
    ]

    return TimeSeries(
        start_date=start,
        daily=tuple(daily),
        weekly=tuple(weekly),
        monthly=tuple(monthly),
    )


def build_metric_catalog(
    business_metrics: BusinessMetrics,
    profile: BusinessProfile,
    seed: int,
    *,
    reference_time: datetime,
    include_time_series: bool = True,
    definitions: Sequence[MetricDefinition] = METRIC_DEFINITIONS,
) -> list[MetricData]:
    """Evaluate every definition, marking each with its availability."""
    availability = profile.metric_availability
    catalog: list[MetricData] = []
    for index, definition in enumerate(definitions):
        if definition.source is not None:
            value = float(getattr(business_metrics, definition.source)) * definition.factor
            if definition.unit == COUNT:
                value = float(math.floor(value))
        else:
            low, high = definition.synth_range
            value = low + (high - low) * seeded_random(seed + SYNTHESIZED_SALT + index)
        value = _round(value, definition.unit)

        series = None
        if include_time_series:
            series = generate_time_series(
                value, definition, profile, seed + index, reference_time
            )
        catalog.append(
            MetricData(
                name=definition.name,
                category=definition.category,
                kind=definition.kind,
                unit=definition.unit,
                chart_type=definition.chart_type,
                value=value,
                available=availability.is_available(definition.availability_flag),
                time_series=series,
            )
        )
    logger.debug(
        "Built %d metrics for %s, %d available",
        len(catalog),
        profile.key,
        sum(1 for m in catalog if m.available),
    )
    return catalog


def presented_metrics(catalog: Sequence[MetricData]) -> list[MetricData]:
    """Only the metrics relevant to the business type."""
    return [metric for metric in catalog if metric.available]
