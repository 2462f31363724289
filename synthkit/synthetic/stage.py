"""Business maturity stages and their scaling multipliers."""

from __future__ import annotations

from enum import Enum
from typing import Union

from synthkit.exceptions import InvalidArgumentError


class Stage(str, Enum):
    EARLY = "early"
    GROWTH = "growth"
    ENTERPRISE = "enterprise"

    @classmethod
    def parse(cls, value: Union[str, "Stage", None]) -> "Stage":
        """Parse a stage name; ``None`` means growth and ``startup`` means early."""
        if isinstance(value, Stage):
            return value
        if value is None:
            return cls.GROWTH
        key = str(value).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise InvalidArgumentError(
                f"Unknown stage {value!r}; expected one of: {valid}"
            ) from None

    @property
    def amount_multiplier(self) -> float:
        return AMOUNT_MULTIPLIERS[self]

    @property
    def count_multiplier(self) -> float:
        return COUNT_MULTIPLIERS[self]

    @property
    def volume_multiplier(self) -> float:
        return VOLUME_MULTIPLIERS[self]


_ALIASES = {"startup": "early"}

AMOUNT_MULTIPLIERS = {Stage.EARLY: 0.7, Stage.GROWTH: 1.0, Stage.ENTERPRISE: 1.4}

# Scales the generated sample size when counts are not given
COUNT_MULTIPLIERS = {Stage.EARLY: 0.5, Stage.GROWTH: 1.0, Stage.ENTERPRISE: 2.0}

# Scales the estimated production volumes reported in dataset metadata
VOLUME_MULTIPLIERS = {Stage.EARLY: 0.1, Stage.GROWTH: 1.0, Stage.ENTERPRISE: 20.0}

LIFETIME_MONTHS = {Stage.EARLY: 12, Stage.GROWTH: 24, Stage.ENTERPRISE: 36}

BASE_CONVERSION_RATES = {Stage.EARLY: 0.10, Stage.GROWTH: 0.12, Stage.ENTERPRISE: 0.15}
