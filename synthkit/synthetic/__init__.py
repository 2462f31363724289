"""Deterministic generators for Stripe-shaped records.

Every generator is a pure function of its seed and parameters. Dataset
assembly lives in :mod:`synthkit.synthetic.assembler`.
"""

from .entities import (
    Customer,
    Plan,
    Subscription,
    Invoice,
    Charge,
    generate_customer,
    generate_plan,
    generate_subscription,
    generate_invoice,
    generate_charge,
)
from .prng import seeded_random
from .stage import Stage
from .validation import (
    ValidationResult,
    check_referential_integrity,
    check_temporal_ordering,
    check_non_negative_amounts,
    check_unique_ids,
    validate_dataset,
)

__all__ = [
    "Customer",
    "Plan",
    "Subscription",
    "Invoice",
    "Charge",
    "generate_customer",
    "generate_plan",
    "generate_subscription",
    "generate_invoice",
    "generate_charge",
    "seeded_random",
    "Stage",
    "ValidationResult",
    "check_referential_integrity",
    "check_temporal_ordering",
    "check_non_negative_amounts",
    "check_unique_ids",
    "validate_dataset",
]
