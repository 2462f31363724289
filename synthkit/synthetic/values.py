"""Realistic scalar value generators.

Each generator is a pure function of its seed and a :class:`BusinessProfile`
(plus an explicit reference time for timestamps). Calling one twice with the
same arguments returns the same value.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from synthkit.registry import tables
from synthkit.registry.profiles import AmountRange, BusinessProfile
from synthkit.synthetic.prng import seeded_bool, seeded_choice, seeded_int, seeded_random
from synthkit.synthetic.stage import Stage

DEFAULT_REFERENCE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)

SECONDS_PER_DAY = 86400
ID_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
ID_LENGTH = 20
# Id characters draw from seed + ID_OFFSET + position, clear of field offsets
ID_OFFSET = 50
NULL_DESCRIPTION_RATE = 0.25

_CENT = Decimal("0.01")


def stripe_id(prefix: str, seed: int) -> str:
    """Return an id such as ``cus_4fQ...`` with 20 seeded alphanumeric characters."""
    chars = [
        seeded_choice(seed + ID_OFFSET + position, ID_ALPHABET)
        for position in range(ID_LENGTH)
    ]
    return prefix + "".join(chars)


def person_name(seed: int) -> str:
    return f"{seeded_choice(seed, tables.FIRST_NAMES)} {seeded_choice(seed + 1, tables.LAST_NAMES)}"


def company_name(seed: int, profile: BusinessProfile) -> str:
    prefix = seeded_choice(seed, profile.company_prefixes)
    suffix = seeded_choice(seed + 1, profile.company_suffixes)
    return f"{prefix} {suffix}"


def customer_name(seed: int, profile: BusinessProfile) -> str:
    """Company name for B2B business types, person name otherwise."""
    if profile.is_b2b:
        return company_name(seed, profile)
    return person_name(seed)


def _slug(text: str, separator: str = "") -> str:
    return re.sub(r"[^a-z0-9]+", separator, text.lower()).strip(separator)


def email(seed: int, name: str, profile: BusinessProfile) -> str:
    """Email address derived from ``name``.

    B2B customers get a role mailbox on a domain built from the company
    name; consumers get ``first.last`` (sometimes with a number) on a
    webmail domain.
    """
    if profile.is_b2b:
        local = seeded_choice(seed, tables.BUSINESS_EMAIL_LOCALS)
        return f"{local}@{_slug(name)}.com"

    local = _slug(name, ".")
    if seeded_bool(seed, 0.4):
        local = f"{local}{seeded_int(seed + 1, 1, 99)}"
    domain = seeded_choice(seed + 2, tables.CONSUMER_EMAIL_DOMAINS)
    return f"{local}@{domain}"


def phone(seed: int) -> str:
    area = seeded_int(seed, 201, 989)
    exchange = seeded_int(seed + 1, 200, 999)
    line = seeded_int(seed + 2, 0, 9999)
    return f"+1{area}{exchange}{line:04d}"


def address(seed: int) -> dict[str, Optional[str]]:
    """US postal address; city and state come from the same table index."""
    index = int(seeded_random(seed) * len(tables.CITIES))
    number = seeded_choice(seed + 1, tables.STREET_NUMBERS)
    street = seeded_choice(seed + 2, tables.STREET_NAMES)
    street_type = seeded_choice(seed + 3, tables.STREET_TYPES)
    return {
        "line1": f"{number} {street} {street_type}",
        "line2": None,
        "city": tables.CITIES[index],
        "state": tables.STATES[index],
        "postal_code": f"{seeded_int(seed + 4, 10000, 99999)}",
        "country": "US",
    }


def scale_cents(base_cents: float, stage: Stage) -> int:
    scaled = Decimal(repr(base_cents)) * Decimal(repr(stage.amount_multiplier))
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def amount_cents(seed: int, amount_range: AmountRange, stage: Stage) -> int:
    """Seeded amount in cents inside ``amount_range``, scaled by the stage.

    The same seed yields the same position inside the range for every
    stage, so amounts grow monotonically from early to enterprise.
    """
    if amount_range.is_empty:
        return 0
    span = amount_range.max_cents - amount_range.min_cents
    return scale_cents(amount_range.min_cents + seeded_random(seed) * span, stage)


def recurring_amount_cents(seed: int, profile: BusinessProfile, stage: Stage) -> int:
    """Recurring price, using the one-time range when the type has no subscriptions."""
    amount_range = profile.subscription_range
    if amount_range.is_empty:
        amount_range = profile.one_time_range
    return amount_cents(seed, amount_range, stage)


def cents_to_dollars(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(_CENT, rounding=ROUND_HALF_UP)


def amount(seed: int, profile: BusinessProfile, kind: str, stage: Stage) -> Decimal:
    """Monetary amount in dollars rounded to 2 decimals."""
    return cents_to_dollars(amount_cents(seed, profile.amount_range(kind), stage))


def unix_timestamp(seed: int, reference_time: datetime, max_days_ago: int) -> int:
    """Unix seconds somewhere in the ``max_days_ago`` days before ``reference_time``."""
    offset = int(seeded_random(seed) * max_days_ago * SECONDS_PER_DAY)
    return int(reference_time.timestamp()) - offset


def iso_timestamp(timestamp: int) -> str:
    return (
        datetime.fromtimestamp(timestamp, tz=timezone.utc)
        .isoformat()
        .replace("+00:00", "Z")
    )


def description(
    seed: int, profile: BusinessProfile, *, allow_none: bool = False
) -> Optional[str]:
    if allow_none and seeded_bool(seed, NULL_DESCRIPTION_RATE):
        return None
    return seeded_choice(seed + 1, profile.descriptions)


def plan_name(seed: int, profile: BusinessProfile) -> str:
    return seeded_choice(seed, profile.plan_names)


def card_details(seed: int, reference_time: datetime) -> dict[str, object]:
    return {
        "type": "card",
        "card": {
            "brand": seeded_choice(seed, tables.CARD_BRANDS),
            "last4": f"{seeded_int(seed + 1, 0, 9999):04d}",
            "exp_month": seeded_int(seed + 2, 1, 12),
            "exp_year": reference_time.year + seeded_int(seed + 3, 1, 5),
            "country": "US",
            "funding": "credit",
        },
    }


def customer_properties(
    seed: int, profile: BusinessProfile, stage: Stage
) -> dict[str, object]:
    """Persona fields for the business type; dollar ranges scale with the stage."""
    values: dict[str, object] = {}
    for offset, spec in enumerate(profile.customer_properties):
        field_seed = seed + offset
        if spec.value_range is not None:
            low, high = spec.value_range
            base = low + seeded_random(field_seed) * (high - low)
            values[spec.name] = float(cents_to_dollars(scale_cents(base * 100, stage)))
        else:
            values[spec.name] = seeded_choice(field_seed, spec.choices)
    return values
