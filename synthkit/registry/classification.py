"""Keyword classifier mapping free-text business descriptions to a type key."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

FALLBACK_TYPE = "checkout-ecommerce"


@dataclass(frozen=True)
class KeywordRule:
    """Matches when every word of any one group occurs in the text."""

    business_type: str
    groups: tuple[tuple[str, ...], ...]

    def matches(self, text: str) -> bool:
        return any(all(word in text for word in group) for group in self.groups)


# Evaluated in order; first match wins
RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "b2b-saas-subscriptions",
        (("b2b", "saas"), ("saas",), ("software",)),
    ),
    KeywordRule(
        "food-delivery-platform",
        (("food",), ("delivery",), ("restaurant",)),
    ),
    KeywordRule(
        "consumer-fitness-app",
        (("fitness",), ("workout",), ("health",)),
    ),
    KeywordRule(
        "b2b-invoicing",
        (("invoice",), ("billing",)),
    ),
    KeywordRule(
        "property-management-platform",
        (("property",), ("rental",), ("real estate",)),
    ),
    KeywordRule(
        "creator-platform",
        (("creator",), ("content",), ("influencer",)),
    ),
    KeywordRule(
        "donation-marketplace",
        (("donation",), ("charity",), ("nonprofit",)),
    ),
)


def classify_business_type(
    text: Optional[str], rules: Sequence[KeywordRule] = RULES
) -> str:
    """Return the business type key for a free-text description.

    Parameters
    ----------
    text:
        Description such as ``"A B2B SaaS tool for sales teams"``.
    rules:
        Ordered rule list; defaults to :data:`RULES`.

    Returns
    -------
    str
        The first matching rule's business type, or ``checkout-ecommerce``
        when nothing matches (including empty input).

    Examples
    --------
    >>> classify_business_type("Meal delivery for offices")
    'food-delivery-platform'
    >>> classify_business_type("Handmade jewelry shop")
    'checkout-ecommerce'
    """
    if not text:
        return FALLBACK_TYPE
    lowered = text.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.business_type
    return FALLBACK_TYPE
