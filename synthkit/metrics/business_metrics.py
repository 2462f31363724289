"""Aggregate business metrics computed from an assembled dataset.

Ledger metrics (payment volume, success rate, AOV, MRR, churn, invoice
balances) are derived strictly from the generated records. Customer
lifetime value and conversion rate are seeded, stage-scaled approximations:

- CLV = ARPU x expected lifetime months x jitter, where ARPU is the average
  amount of active subscriptions (falling back to AOV when there are none),
  lifetime is 12/24/36 months for early/growth/enterprise and the jitter is
  a seeded factor in [0.9, 1.1].
- Conversion rate = stage base rate (0.10/0.12/0.15) plus a seeded value in
  [0, 0.05).

Subscriber lifetime value is ARPU divided by the churn rate, or twelve
months of ARPU when nothing churned. Any ratio with a zero denominator is 0.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence, Union

from synthkit.synthetic.entities import Charge, Customer, Invoice, Subscription
from synthkit.synthetic.prng import seeded_random
from synthkit.synthetic.stage import BASE_CONVERSION_RATES, LIFETIME_MONTHS, Stage

CLV_JITTER_SALT = 601
CONVERSION_SALT = 603
CONVERSION_SPREAD = Decimal("0.05")
NO_CHURN_LIFETIME_MONTHS = 12

MONEY = Decimal("0.01")
RATE = Decimal("0.0001")

Number = Union[int, Decimal]


def safe_divide(numerator: Number, denominator: Number) -> Decimal:
    """Divide, returning ``Decimal(0)`` when the denominator is zero."""
    if denominator == 0:
        return Decimal("0")
    return Decimal(numerator) / Decimal(denominator)


def _money(value: Decimal) -> Decimal:
    return value.quantize(MONEY, rounding=ROUND_HALF_UP)


def _rate(value: Decimal) -> Decimal:
    return value.quantize(RATE, rounding=ROUND_HALF_UP)


def _dollars(cents: int) -> Decimal:
    return _money(Decimal(cents) / 100)


@dataclass(frozen=True)
class BusinessMetrics:
    """Headline metrics for one dataset.

    Money is in dollars with two decimals; rates are fractions in ``[0, 1]``.
    """

    total_customers: int
    gross_payment_volume: Decimal
    attempted_payment_volume: Decimal
    failed_payment_volume: Decimal
    total_payments: int
    successful_payments: int
    failed_payments: int
    payment_success_rate: Decimal
    payment_failure_rate: Decimal
    average_order_value: Decimal
    spend_per_customer: Decimal
    monthly_recurring_revenue: Decimal
    total_subscriptions: int
    active_subscriptions: int
    trialing_subscriptions: int
    canceled_subscriptions: int
    churn_rate: Decimal
    average_revenue_per_user: Decimal
    churned_revenue: Decimal
    subscriber_lifetime_value: Decimal
    total_invoices: int
    invoice_volume: Decimal
    past_due_invoice_volume: Decimal
    customer_lifetime_value: Decimal
    conversion_rate: Decimal

    RATE_FIELDS = (
        "payment_success_rate",
        "payment_failure_rate",
        "churn_rate",
        "conversion_rate",
    )

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"{f.name} cannot be negative: {value}")
        for name in self.RATE_FIELDS:
            value = getattr(self, name)
            if value > 1:
                raise ValueError(f"{name} must be within [0, 1]: {value}")
        if self.successful_payments + self.failed_payments > self.total_payments:
            raise ValueError("successful + failed payments exceed total payments")
        if (
            self.active_subscriptions
            + self.trialing_subscriptions
            + self.canceled_subscriptions
            > self.total_subscriptions
        ):
            raise ValueError("subscription status counts exceed total subscriptions")
        if self.past_due_invoice_volume > self.invoice_volume:
            raise ValueError("past due invoice volume exceeds invoice volume")

    def as_dict(self) -> dict[str, Union[int, float]]:
        """JSON-ready representation with camelCase keys."""
        return {
            "totalCustomers": self.total_customers,
            "grossPaymentVolume": float(self.gross_payment_volume),
            "attemptedPaymentVolume": float(self.attempted_payment_volume),
            "failedPaymentVolume": float(self.failed_payment_volume),
            "totalPayments": self.total_payments,
            "successfulPayments": self.successful_payments,
            "failedPayments": self.failed_payments,
            "paymentSuccessRate": float(self.payment_success_rate),
            "paymentFailureRate": float(self.payment_failure_rate),
            "averageOrderValue": float(self.average_order_value),
            "spendPerCustomer": float(self.spend_per_customer),
            "monthlyRecurringRevenue": float(self.monthly_recurring_revenue),
            "totalSubscriptions": self.total_subscriptions,
            "activeSubscriptions": self.active_subscriptions,
            "trialingSubscriptions": self.trialing_subscriptions,
            "canceledSubscriptions": self.canceled_subscriptions,
            "churnRate": float(self.churn_rate),
            "averageRevenuePerUser": float(self.average_revenue_per_user),
            "churnedRevenue": float(self.churned_revenue),
            "subscriberLifetimeValue": float(self.subscriber_lifetime_value),
            "totalInvoices": self.total_invoices,
            "invoiceVolume": float(self.invoice_volume),
            "pastDueInvoiceVolume": float(self.past_due_invoice_volume),
            "customerLifetimeValue": float(self.customer_lifetime_value),
            "conversionRate": float(self.conversion_rate),
        }


def calculate_customer_lifetime_value(
    active_amounts_cents: Sequence[int],
    average_order_value: Decimal,
    stage: Stage,
    seed: int,
) -> Decimal:
    if active_amounts_cents:
        arpu = safe_divide(sum(active_amounts_cents), len(active_amounts_cents)) / 100
    else:
        arpu = average_order_value
    jitter = Decimal("0.9") + Decimal("0.2") * Decimal(
        repr(seeded_random(seed + CLV_JITTER_SALT))
    )
    return _money(arpu * LIFETIME_MONTHS[stage] * jitter)


def calculate_subscriber_lifetime_value(arpu: Decimal, churn_rate: Decimal) -> Decimal:
    if churn_rate == 0:
        return _money(arpu * NO_CHURN_LIFETIME_MONTHS)
    return _money(arpu / churn_rate)


def calculate_conversion_rate(stage: Stage, seed: int) -> Decimal:
    base = Decimal(repr(BASE_CONVERSION_RATES[stage]))
    spread = CONVERSION_SPREAD * Decimal(repr(seeded_random(seed + CONVERSION_SALT)))
    return _rate(base + spread)


def calculate_business_metrics(
    customers: Sequence[Customer],
    subscriptions: Sequence[Subscription],
    charges: Sequence[Charge],
    *,
    stage: Stage,
    seed: int,
    invoices: Sequence[Invoice] = (),
) -> BusinessMetrics:
    """Compute every headline metric, whether or not it applies to the business type.

    Parameters
    ----------
    customers, subscriptions, charges:
        Entity pools of an assembled dataset. Any of them may be empty.
    stage:
        Business stage, used by the CLV and conversion heuristics.
    seed:
        Dataset seed, used by the CLV and conversion heuristics.
    invoices:
        Invoice pool; open invoices count as past due.

    Returns
    -------
    BusinessMetrics
        A fresh value; nothing is cached or mutated.

    Examples
    --------
    >>> m = calculate_business_metrics([], [], [], stage=Stage.GROWTH, seed=1)
    >>> m.average_order_value
    Decimal('0.00')
    """
    succeeded = [c for c in charges if c.status == "succeeded"]
    failed = [c for c in charges if c.status == "failed"]
    gpv_cents = sum(c.amount for c in succeeded)
    attempted_cents = sum(c.amount for c in charges)

    active = [s for s in subscriptions if s.status == "active"]
    trialing_count = sum(1 for s in subscriptions if s.status == "trialing")
    canceled_count = sum(1 for s in subscriptions if s.status == "canceled")
    mrr_cents = sum(s.amount for s in active)

    gross_payment_volume = _dollars(gpv_cents)
    average_order_value = _money(safe_divide(gpv_cents, len(succeeded)) / 100)
    monthly_recurring_revenue = _dollars(mrr_cents)
    churn_rate = _rate(safe_divide(canceled_count, len(subscriptions)))
    arpu = _money(safe_divide(mrr_cents, len(active)) / 100)

    return BusinessMetrics(
        total_customers=len(customers),
        gross_payment_volume=gross_payment_volume,
        attempted_payment_volume=_dollars(attempted_cents),
        failed_payment_volume=_dollars(sum(c.amount for c in failed)),
        total_payments=len(charges),
        successful_payments=len(succeeded),
        failed_payments=len(failed),
        payment_success_rate=_rate(safe_divide(len(succeeded), len(charges))),
        payment_failure_rate=_rate(safe_divide(len(failed), len(charges))),
        average_order_value=average_order_value,
        spend_per_customer=_money(safe_divide(gpv_cents, len(customers)) / 100),
        monthly_recurring_revenue=monthly_recurring_revenue,
        total_subscriptions=len(subscriptions),
        active_subscriptions=len(active),
        trialing_subscriptions=trialing_count,
        canceled_subscriptions=canceled_count,
        churn_rate=churn_rate,
        average_revenue_per_user=arpu,
        churned_revenue=_money(monthly_recurring_revenue * churn_rate),
        subscriber_lifetime_value=calculate_subscriber_lifetime_value(arpu, churn_rate),
        total_invoices=len(invoices),
        invoice_volume=_dollars(sum(i.total for i in invoices)),
        past_due_invoice_volume=_dollars(
            sum(i.total for i in invoices if i.status == "open")
        ),
        customer_lifetime_value=calculate_customer_lifetime_value(
            [s.amount for s in active], average_order_value, stage, seed
        ),
        conversion_rate=calculate_conversion_rate(stage, seed),
    )
