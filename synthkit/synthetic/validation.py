from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING

from synthkit.synthetic.entities import CHARGE_WINDOW_DAYS, DAY

if TYPE_CHECKING:
    from synthkit.synthetic.assembler import Dataset


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: str = ""


def check_referential_integrity(dataset: "Dataset") -> ValidationResult:
    customer_ids = {c.id for c in dataset.customers}
    plan_ids = {p.id for p in dataset.plans}
    subscriptions = {s.id: s for s in dataset.subscriptions}
    invoices = {i.id: i for i in dataset.invoices}

    for idx, sub in enumerate(dataset.subscriptions):
        if sub.customer not in customer_ids:
            return ValidationResult(False, f"subscription {idx} references unknown customer {sub.customer}")
        if sub.plan not in plan_ids:
            return ValidationResult(False, f"subscription {idx} references unknown plan {sub.plan}")

    for idx, inv in enumerate(dataset.invoices):
        if inv.customer not in customer_ids:
            return ValidationResult(False, f"invoice {idx} references unknown customer {inv.customer}")
        if inv.subscription is None:
            continue
        sub = subscriptions.get(inv.subscription)
        if sub is None:
            return ValidationResult(False, f"invoice {idx} references unknown subscription {inv.subscription}")
        if sub.customer != inv.customer:
            return ValidationResult(False, f"invoice {idx} customer differs from its subscription's customer")

    for idx, charge in enumerate(dataset.charges):
        if charge.customer not in customer_ids:
            return ValidationResult(False, f"charge {idx} references unknown customer {charge.customer}")
        if charge.invoice is None:
            continue
        inv = invoices.get(charge.invoice)
        if inv is None:
            return ValidationResult(False, f"charge {idx} references unknown invoice {charge.invoice}")
        if inv.customer != charge.customer:
            return ValidationResult(False, f"charge {idx} customer differs from its invoice's customer")

    return ValidationResult(True, "all references resolve")


def check_temporal_ordering(dataset: "Dataset") -> ValidationResult:
    customers = {c.id: c for c in dataset.customers}
    subscriptions = {s.id: s for s in dataset.subscriptions}
    invoices = {i.id: i for i in dataset.invoices}

    # Dangling references are reported by check_referential_integrity
    for idx, sub in enumerate(dataset.subscriptions):
        customer = customers.get(sub.customer)
        if customer is not None and sub.current_period_start < customer.created:
            return ValidationResult(False, f"subscription {idx} starts before its customer was created")
        if sub.current_period_end <= sub.current_period_start:
            return ValidationResult(False, f"subscription {idx} period ends before it starts")

    for idx, inv in enumerate(dataset.invoices):
        sub = subscriptions.get(inv.subscription) if inv.subscription else None
        if sub is not None and inv.created < sub.current_period_start:
            return ValidationResult(False, f"invoice {idx} created before its subscription period")

    window = CHARGE_WINDOW_DAYS * DAY
    for idx, charge in enumerate(dataset.charges):
        invoice = invoices.get(charge.invoice) if charge.invoice else None
        if invoice is None:
            continue
        lag = charge.created - invoice.created
        if lag < 0 or lag > window:
            return ValidationResult(False, f"charge {idx} created {lag}s from its invoice, outside the window")

    return ValidationResult(True, "timestamps are ordered")


def check_non_negative_amounts(dataset: "Dataset") -> ValidationResult:
    for kind, records, attrs in (
        ("plan", dataset.plans, ("amount",)),
        ("subscription", dataset.subscriptions, ("amount",)),
        ("invoice", dataset.invoices, ("amount_due", "amount_paid", "amount_remaining")),
        ("charge", dataset.charges, ("amount",)),
    ):
        for idx, record in enumerate(records):
            for attr in attrs:
                if getattr(record, attr) < 0:
                    return ValidationResult(False, f"{kind} {idx} has negative {attr}")
    return ValidationResult(True, "amounts are non-negative")


def check_unique_ids(dataset: "Dataset") -> ValidationResult:
    ids = Counter(
        record.id
        for pool in (
            dataset.customers,
            dataset.plans,
            dataset.subscriptions,
            dataset.invoices,
            dataset.charges,
        )
        for record in pool
    )
    duplicates = sorted(record_id for record_id, count in ids.items() if count > 1)
    if duplicates:
        return ValidationResult(False, f"duplicate ids: {', '.join(duplicates[:5])}")
    return ValidationResult(True, f"{len(ids)} ids are unique")


def validate_dataset(dataset: "Dataset") -> dict[str, ValidationResult]:
    """Run every check and return the results keyed by check name."""
    return {
        "referential_integrity": check_referential_integrity(dataset),
        "temporal_ordering": check_temporal_ordering(dataset),
        "non_negative_amounts": check_non_negative_amounts(dataset),
        "unique_ids": check_unique_ids(dataset),
    }
