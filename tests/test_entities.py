from datetime import datetime, timezone

import pytest

from synthkit.registry.profiles import load_registry
from synthkit.synthetic.entities import (
    CHARGE_WINDOW_DAYS,
    DAY,
    Invoice,
    Plan,
    Subscription,
    generate_charge,
    generate_customer,
    generate_invoice,
    generate_plan,
    generate_subscription,
)
from synthkit.synthetic.stage import Stage

REFERENCE = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture(scope="module")
def profile():
    return load_registry().resolve("b2b-saas-subscriptions")


@pytest.fixture(scope="module")
def customers(profile):
    return [
        generate_customer(1000 * i, profile, Stage.GROWTH, reference_time=REFERENCE)
        for i in range(1, 6)
    ]


@pytest.fixture(scope="module")
def plan(profile):
    return generate_plan(2101, profile, Stage.GROWTH)


def test_customer_shape(profile, customers) -> None:
    customer = customers[0].as_dict()
    assert customer["object"] == "customer"
    assert customer["id"].startswith("cus_")
    assert customer["currency"] == "usd"
    assert customer["livemode"] is False
    assert customer["metadata"]["business_type"] == "b2b-saas-subscriptions"
    assert customer["metadata"]["customer_type"] == "business"
    # Persona fields sit at the top level
    assert "industry" in customer
    assert customer["created"] <= int(REFERENCE.timestamp())


def test_plan_shape(profile, plan) -> None:
    data = plan.as_dict()
    assert data["object"] == "plan"
    assert data["id"].startswith("plan_")
    assert data["interval"] in ("month", "year")
    assert data["name"] in profile.plan_names
    assert data["amount"] > 0


def test_plan_rejects_unknown_interval() -> None:
    with pytest.raises(ValueError):
        Plan("plan_x", "Pro", 100, "week", "desc", "default")


def test_subscription_references_its_parents(customers, plan) -> None:
    customer = customers[2]
    sub = generate_subscription(3211, customer, plan, reference_time=REFERENCE)

    assert sub.customer == customer.id
    assert sub.plan == plan.id
    assert sub.amount == plan.amount
    assert sub.created >= customer.created
    assert sub.created <= sub.current_period_start < sub.current_period_end
    assert sub.status in ("active", "trialing", "past_due", "canceled")
    assert (sub.canceled_at is not None) == (sub.status == "canceled")


def test_subscription_invoice_inherits_customer_and_period(profile, customers, plan) -> None:
    sub = generate_subscription(3211, customers[0], plan, reference_time=REFERENCE)
    invoice = generate_invoice(
        4307, profile, Stage.GROWTH, subscription=sub, reference_time=REFERENCE
    )

    assert invoice.customer == sub.customer
    assert invoice.subscription == sub.id
    assert invoice.amount_due == sub.amount
    assert invoice.created >= sub.current_period_start
    assert invoice.amount_paid + invoice.amount_remaining == invoice.amount_due
    assert invoice.as_dict()["paid"] == (invoice.status == "paid")


def test_standalone_invoice(profile, customers) -> None:
    customer = customers[1]
    invoice = generate_invoice(
        4307, profile, Stage.GROWTH, customer=customer, reference_time=REFERENCE
    )
    assert invoice.subscription is None
    assert invoice.customer == customer.id
    assert invoice.created >= customer.created
    assert invoice.period_start == invoice.period_end == invoice.created


def test_invoice_needs_exactly_one_parent(profile, customers, plan) -> None:
    sub = generate_subscription(3211, customers[0], plan, reference_time=REFERENCE)
    with pytest.raises(ValueError):
        generate_invoice(1, profile, Stage.GROWTH, reference_time=REFERENCE)
    with pytest.raises(ValueError):
        generate_invoice(
            1,
            profile,
            Stage.GROWTH,
            subscription=sub,
            customer=customers[0],
            reference_time=REFERENCE,
        )


def test_invoice_amounts_must_balance() -> None:
    with pytest.raises(ValueError):
        Invoice("in_x", "cus_x", None, "paid", 100, 60, 10, 0, 0, 0)


def test_charges_without_invoices_are_one_time(profile, customers) -> None:
    customer_ids = {c.id for c in customers}
    for i in range(20):
        charge = generate_charge(
            5401 + i * 5000,
            profile,
            Stage.GROWTH,
            customers=customers,
            invoices=[],
            reference_time=REFERENCE,
        )
        assert charge.is_one_time
        assert charge.customer in customer_ids
        assert charge.as_dict()["metadata"]["charge_type"] == "one_time"


def test_recurring_charges_follow_their_invoice(profile, customers, plan) -> None:
    subs = [
        generate_subscription(3211 + i * 3000, customers[i], plan, reference_time=REFERENCE)
        for i in range(len(customers))
    ]
    invoices = [
        generate_invoice(
            4307 + i * 4000, profile, Stage.GROWTH, subscription=sub, reference_time=REFERENCE
        )
        for i, sub in enumerate(subs)
    ]
    by_id = {inv.id: inv for inv in invoices}

    charges = [
        generate_charge(
            5401 + i * 5000,
            profile,
            Stage.GROWTH,
            customers=customers,
            invoices=invoices,
            reference_time=REFERENCE,
        )
        for i in range(50)
    ]
    recurring = [c for c in charges if not c.is_one_time]
    assert recurring
    assert any(c.is_one_time for c in charges)
    for charge in recurring:
        invoice = by_id[charge.invoice]
        assert charge.customer == invoice.customer
        assert charge.amount == invoice.total
        assert 0 <= charge.created - invoice.created <= CHARGE_WINDOW_DAYS * DAY


def test_charge_status_drives_capture_fields(profile, customers) -> None:
    charges = [
        generate_charge(
            5401 + i * 5000,
            profile,
            Stage.GROWTH,
            customers=customers,
            invoices=[],
            reference_time=REFERENCE,
        )
        for i in range(100)
    ]
    for charge in charges:
        data = charge.as_dict()
        assert data["paid"] == data["captured"] == (charge.status == "succeeded")
        assert data["amount_captured"] == (charge.amount if charge.succeeded else 0)
        assert (charge.failure_code is not None) == (charge.status == "failed")
        assert data["payment_method_details"]["type"] == "card"


def test_generate_charge_requires_customers(profile) -> None:
    with pytest.raises(ValueError):
        generate_charge(
            1, profile, Stage.GROWTH, customers=[], invoices=[], reference_time=REFERENCE
        )


def test_invoices_and_charges_never_postdate_reference_time(profile, customers) -> None:
    reference_ts = int(REFERENCE.timestamp())
    period_start = reference_ts - 2 * DAY
    subscription = Subscription(
        id="sub_recent",
        customer=customers[0].id,
        plan="plan_1",
        status="active",
        created=period_start,
        current_period_start=period_start,
        current_period_end=period_start + 30 * DAY,
        amount=4900,
        interval="month",
    )

    invoices = [
        generate_invoice(
            4000 * i + 307,
            profile,
            Stage.GROWTH,
            subscription=subscription,
            reference_time=REFERENCE,
        )
        for i in range(1, 41)
    ]
    assert all(period_start <= inv.created <= reference_ts for inv in invoices)
    # Most unclamped offsets would land up to four weeks past the reference time
    assert any(inv.created == reference_ts for inv in invoices)

    charges = [
        generate_charge(
            5000 * i + 401,
            profile,
            Stage.GROWTH,
            customers=customers,
            invoices=invoices,
            reference_time=REFERENCE,
        )
        for i in range(1, 41)
    ]
    assert all(charge.created <= reference_ts for charge in charges)
    by_id = {inv.id: inv for inv in invoices}
    for charge in charges:
        if charge.invoice is not None:
            assert charge.created >= by_id[charge.invoice].created
