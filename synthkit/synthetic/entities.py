"""Stripe-shaped entity generators.

Generators never invent foreign keys: dependents receive the already
generated parent entity and copy its id, so references are valid by
construction. Amounts are stored as integer cents like Stripe does.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional, Sequence

from synthkit.registry.profiles import BusinessProfile
from synthkit.synthetic import values
from synthkit.synthetic.prng import (
    seeded_bool,
    seeded_choice,
    seeded_random,
    seeded_weighted_choice,
)
from synthkit.synthetic.stage import Stage

DAY = values.SECONDS_PER_DAY
CURRENCY = "usd"

CUSTOMER_HISTORY_DAYS = 730
ACTIVITY_WINDOW_DAYS = 180
CHARGE_WINDOW_DAYS = 3
ONE_TIME_CHARGE_RATE = 0.3
MONTHLY_PLAN_RATE = 0.8
INTERVAL_DAYS = {"month": 30, "year": 365}

SUBSCRIPTION_STATUSES = (
    ("active", 0.6),
    ("trialing", 0.15),
    ("past_due", 0.1),
    ("canceled", 0.15),
)
INVOICE_STATUSES = (("paid", 0.75), ("open", 0.17), ("draft", 0.08))
CHARGE_STATUSES = (("succeeded", 0.82), ("pending", 0.06), ("failed", 0.12))
FAILURE_CODES = ("card_declined", "insufficient_funds", "expired_card", "processing_error")


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    email: str
    phone: str
    address: Mapping[str, Optional[str]]
    created: int
    business_type: str
    is_business: bool
    properties: Mapping[str, object] = field(default_factory=dict)

    def as_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "object": "customer",
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": dict(self.address),
            "created": self.created,
            "currency": CURRENCY,
            "livemode": False,
            "metadata": {
                "business_type": self.business_type,
                "customer_type": "business" if self.is_business else "individual",
            },
            **self.properties,
        }


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    amount: int
    interval: str
    product_description: str
    business_type: str

    def __post_init__(self) -> None:
        if self.interval not in INTERVAL_DAYS:
            raise ValueError(f"Unsupported plan interval: {self.interval}")

    def as_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "object": "plan",
            "name": self.name,
            "nickname": self.name,
            "amount": self.amount,
            "currency": CURRENCY,
            "interval": self.interval,
            "interval_count": 1,
            "active": True,
            "livemode": False,
            "metadata": {
                "business_type": self.business_type,
                "description": self.product_description,
            },
        }


@dataclass(frozen=True)
class Subscription:
    id: str
    customer: str
    plan: str
    status: str
    created: int
    current_period_start: int
    current_period_end: int
    amount: int
    interval: str
    canceled_at: Optional[int] = None

    def as_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "object": "subscription",
            "customer": self.customer,
            "plan": self.plan,
            "status": self.status,
            "created": self.created,
            "current_period_start": self.current_period_start,
            "current_period_end": self.current_period_end,
            "amount": self.amount,
            "currency": CURRENCY,
            "interval": self.interval,
            "canceled_at": self.canceled_at,
            "cancel_at_period_end": False,
            "livemode": False,
            "metadata": {},
        }


@dataclass(frozen=True)
class Invoice:
    id: str
    customer: str
    subscription: Optional[str]
    status: str
    amount_due: int
    amount_paid: int
    amount_remaining: int
    period_start: int
    period_end: int
    created: int
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if self.amount_paid + self.amount_remaining != self.amount_due:
            raise ValueError(
                f"Invoice {self.id}: amount_paid + amount_remaining must equal amount_due"
            )

    @property
    def total(self) -> int:
        return self.amount_due

    def as_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "object": "invoice",
            "customer": self.customer,
            "subscription": self.subscription,
            "status": self.status,
            "amount_due": self.amount_due,
            "amount_paid": self.amount_paid,
            "amount_remaining": self.amount_remaining,
            "subtotal": self.amount_due,
            "total": self.amount_due,
            "currency": CURRENCY,
            "paid": self.status == "paid",
            "period_start": self.period_start,
            "period_end": self.period_end,
            "created": self.created,
            "description": self.description,
            "livemode": False,
            "metadata": {},
        }


@dataclass(frozen=True)
class Charge:
    id: str
    customer: str
    invoice: Optional[str]
    amount: int
    status: str
    created: int
    description: Optional[str]
    payment_method_details: Mapping[str, object]
    failure_code: Optional[str] = None

    @property
    def is_one_time(self) -> bool:
        return self.invoice is None

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"

    def as_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "object": "charge",
            "customer": self.customer,
            "invoice": self.invoice,
            "amount": self.amount,
            "amount_captured": self.amount if self.succeeded else 0,
            "amount_refunded": 0,
            "currency": CURRENCY,
            "status": self.status,
            "paid": self.succeeded,
            "captured": self.succeeded,
            "created": self.created,
            "description": self.description,
            "failure_code": self.failure_code,
            "payment_method_details": dict(self.payment_method_details),
            "livemode": False,
            "metadata": {"charge_type": "one_time" if self.is_one_time else "recurring"},
        }


def generate_customer(
    seed: int, profile: BusinessProfile, stage: Stage, *, reference_time: datetime
) -> Customer:
    name = values.customer_name(seed, profile)
    return Customer(
        id=values.stripe_id("cus_", seed),
        name=name,
        email=values.email(seed + 2, name, profile),
        phone=values.phone(seed + 5),
        address=values.address(seed + 8),
        created=values.unix_timestamp(seed + 13, reference_time, CUSTOMER_HISTORY_DAYS),
        business_type=profile.key,
        is_business=profile.is_b2b,
        properties=values.customer_properties(seed + 14, profile, stage),
    )


def generate_plan(seed: int, profile: BusinessProfile, stage: Stage) -> Plan:
    return Plan(
        id=values.stripe_id("plan_", seed),
        name=values.plan_name(seed, profile),
        amount=values.recurring_amount_cents(seed + 1, profile, stage),
        interval="month" if seeded_bool(seed + 2, MONTHLY_PLAN_RATE) else "year",
        product_description=values.description(seed + 3, profile),
        business_type=profile.key,
    )


def generate_subscription(
    seed: int,
    customer: Customer,
    plan: Plan,
    *,
    reference_time: datetime,
) -> Subscription:
    """Subscribe ``customer`` to ``plan``.

    The subscription starts no earlier than the customer's creation and its
    current period opens within 30 days of the start.
    """
    reference_ts = int(reference_time.timestamp())
    created = max(
        customer.created,
        values.unix_timestamp(seed, reference_time, ACTIVITY_WINDOW_DAYS),
    )
    period_start = min(created + int(seeded_random(seed + 1) * 30 * DAY), reference_ts)
    period_start = max(period_start, created)
    period_end = period_start + INTERVAL_DAYS[plan.interval] * DAY
    status = seeded_weighted_choice(seed + 2, SUBSCRIPTION_STATUSES)
    canceled_at = None
    if status == "canceled":
        canceled_at = period_start + int(seeded_random(seed + 3) * (period_end - period_start))
    return Subscription(
        id=values.stripe_id("sub_", seed),
        customer=customer.id,
        plan=plan.id,
        status=status,
        created=created,
        current_period_start=period_start,
        current_period_end=period_end,
        amount=plan.amount,
        interval=plan.interval,
        canceled_at=canceled_at,
    )


def _invoice_amounts(status: str, amount_due: int) -> tuple[int, int]:
    if status == "paid":
        return amount_due, 0
    return 0, amount_due


def generate_invoice(
    seed: int,
    profile: BusinessProfile,
    stage: Stage,
    *,
    subscription: Optional[Subscription] = None,
    customer: Optional[Customer] = None,
    reference_time: datetime,
) -> Invoice:
    """Bill a subscription period, or a standalone one-off amount.

    Exactly one of ``subscription`` or ``customer`` must be given. A
    subscription invoice inherits the subscription's customer and period
    and is created inside it, never after ``reference_time``.
    """
    if (subscription is None) == (customer is None):
        raise ValueError("generate_invoice needs exactly one of subscription or customer")

    reference_ts = int(reference_time.timestamp())
    status = seeded_weighted_choice(seed + 1, INVOICE_STATUSES)
    if subscription is not None:
        customer_id = subscription.customer
        amount_due = subscription.amount
        period_start = subscription.current_period_start
        period_end = subscription.current_period_end
        created = min(period_start + int(seeded_random(seed + 2) * 30 * DAY), reference_ts)
        created = max(created, period_start)
        subscription_id: Optional[str] = subscription.id
    else:
        customer_id = customer.id
        amount_due = values.amount_cents(seed + 3, profile.one_time_range, stage)
        created = max(
            customer.created,
            values.unix_timestamp(seed + 2, reference_time, ACTIVITY_WINDOW_DAYS),
        )
        period_start = period_end = created
        subscription_id = None

    amount_paid, amount_remaining = _invoice_amounts(status, amount_due)
    return Invoice(
        id=values.stripe_id("in_", seed),
        customer=customer_id,
        subscription=subscription_id,
        status=status,
        amount_due=amount_due,
        amount_paid=amount_paid,
        amount_remaining=amount_remaining,
        period_start=period_start,
        period_end=period_end,
        created=created,
        description=values.description(seed + 4, profile),
    )


def generate_charge(
    seed: int,
    profile: BusinessProfile,
    stage: Stage,
    *,
    customers: Sequence[Customer],
    invoices: Sequence[Invoice],
    reference_time: datetime,
) -> Charge:
    """Create a charge against a seeded invoice, or a one-time payment.

    A seeded 30% of charges (and all of them when ``invoices`` is empty) are
    one-time: they pick a customer directly and draw an independent amount.
    Recurring charges bill the invoice total within three days of the
    invoice being created.
    """
    if not customers:
        raise ValueError("generate_charge needs at least one customer")

    one_time = not invoices or seeded_bool(seed + 1, ONE_TIME_CHARGE_RATE)
    if one_time:
        customer = seeded_choice(seed + 2, customers)
        customer_id = customer.id
        invoice_id: Optional[str] = None
        amount_cents = values.amount_cents(seed + 3, profile.one_time_range, stage)
        created = max(
            customer.created,
            values.unix_timestamp(seed + 4, reference_time, ACTIVITY_WINDOW_DAYS),
        )
    else:
        invoice = seeded_choice(seed + 2, invoices)
        customer_id = invoice.customer
        invoice_id = invoice.id
        amount_cents = invoice.total
        created = min(
            invoice.created + int(seeded_random(seed + 4) * CHARGE_WINDOW_DAYS * DAY),
            max(int(reference_time.timestamp()), invoice.created),
        )

    status = seeded_weighted_choice(seed + 5, CHARGE_STATUSES)
    failure_code = seeded_choice(seed + 6, FAILURE_CODES) if status == "failed" else None
    return Charge(
        id=values.stripe_id("ch_", seed),
        customer=customer_id,
        invoice=invoice_id,
        amount=amount_cents,
        status=status,
        created=created,
        description=values.description(seed + 7, profile, allow_none=True),
        payment_method_details=values.card_details(seed + 9, reference_time),
        failure_code=failure_code,
    )
