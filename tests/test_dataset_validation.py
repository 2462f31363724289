from dataclasses import replace

import pytest

from synthkit import generate_dataset
from synthkit.synthetic.validation import (
    check_non_negative_amounts,
    check_referential_integrity,
    check_temporal_ordering,
    check_unique_ids,
    validate_dataset,
)


@pytest.fixture(scope="module")
def dataset():
    return generate_dataset(
        "consumer-fitness-app",
        "growth",
        2024,
        {"customers": 10, "subscriptions": 8, "invoices": 12, "charges": 30},
    )


def test_generated_dataset_passes(dataset) -> None:
    results = validate_dataset(dataset)
    assert set(results) == {
        "referential_integrity",
        "temporal_ordering",
        "non_negative_amounts",
        "unique_ids",
    }
    assert all(result.ok for result in results.values())


def test_dangling_customer_reference_detected(dataset) -> None:
    broken = replace(dataset.subscriptions[0], customer="cus_missing")
    tampered = replace(dataset, subscriptions=(broken,) + dataset.subscriptions[1:])

    result = check_referential_integrity(tampered)

    assert not result.ok
    assert "cus_missing" in result.message
    # Temporal check skips references it cannot resolve
    assert check_temporal_ordering(tampered).ok


def test_invoice_customer_mismatch_detected(dataset) -> None:
    invoice = dataset.invoices[0]
    other = next(c.id for c in dataset.customers if c.id != invoice.customer)
    tampered = replace(
        dataset, invoices=(replace(invoice, customer=other),) + dataset.invoices[1:]
    )
    assert not check_referential_integrity(tampered).ok


def test_subscription_before_customer_detected(dataset) -> None:
    sub = dataset.subscriptions[0]
    early = replace(
        sub,
        created=0,
        current_period_start=0,
        current_period_end=sub.current_period_end,
    )
    tampered = replace(dataset, subscriptions=(early,) + dataset.subscriptions[1:])
    result = check_temporal_ordering(tampered)
    assert not result.ok
    assert "before its customer" in result.message


def test_charge_outside_window_detected(dataset) -> None:
    index, charge = next(
        (i, c) for i, c in enumerate(dataset.charges) if c.invoice is not None
    )
    late = replace(charge, created=charge.created + 10 * 86400)
    charges = dataset.charges[:index] + (late,) + dataset.charges[index + 1 :]
    assert not check_temporal_ordering(replace(dataset, charges=charges)).ok


def test_negative_amount_detected(dataset) -> None:
    negative = replace(dataset.charges[0], amount=-100)
    tampered = replace(dataset, charges=(negative,) + dataset.charges[1:])
    result = check_non_negative_amounts(tampered)
    assert not result.ok
    assert "negative amount" in result.message


def test_duplicate_ids_detected(dataset) -> None:
    duplicate = dataset.customers[0]
    tampered = replace(dataset, customers=dataset.customers + (duplicate,))
    result = check_unique_ids(tampered)
    assert not result.ok
    assert duplicate.id in result.message
