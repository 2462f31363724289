"""Business type registry.

All per-business-type lookup data (amount ranges, name pools, plan names,
persona fields, seasonality and metric availability) is consolidated into one
immutable :class:`BusinessTypeRegistry`. Generators receive a
:class:`BusinessProfile` by reference and never mutate it.

Unknown business types are not an error: :meth:`BusinessTypeRegistry.resolve`
returns the ``default`` profile.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import ClassVar, Iterator, Mapping, Optional

from synthkit.registry import tables

logger = logging.getLogger(__name__)

METRIC_AVAILABILITY_RESOURCE = "metric_availability.json"


@dataclass(frozen=True)
class AmountRange:
    """Inclusive amount range in cents."""

    min_cents: int
    max_cents: int

    def __post_init__(self) -> None:
        if self.min_cents < 0:
            raise ValueError(f"min_cents cannot be negative: {self.min_cents}")
        if self.max_cents < self.min_cents:
            raise ValueError(
                f"max_cents ({self.max_cents}) must be >= min_cents ({self.min_cents})"
            )

    @property
    def is_empty(self) -> bool:
        return self.max_cents == 0


@dataclass(frozen=True)
class MetricAvailability:
    """Which metric families are relevant for a business type."""

    FLAGS: ClassVar[tuple[str, ...]] = (
        "subscriptions",
        "radar",
        "disputes",
        "refunds",
        "authentication",
    )

    subscriptions: bool = False
    radar: bool = False
    disputes: bool = False
    refunds: bool = False
    authentication: bool = False

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "MetricAvailability":
        """Build flags from a JSON object; missing flags are off."""
        if not isinstance(mapping, Mapping):
            raise ValueError(
                f"Metric availability entry must be an object, got {type(mapping).__name__}"
            )
        unknown = set(mapping) - set(cls.FLAGS)
        if unknown:
            raise ValueError(f"Unknown metric availability flags: {sorted(unknown)}")
        flags = {flag: mapping.get(flag, False) for flag in cls.FLAGS}
        not_bool = sorted(
            flag for flag, value in flags.items() if not isinstance(value, bool)
        )
        if not_bool:
            raise ValueError(f"Metric availability flags must be true or false: {not_bool}")
        return cls(**flags)

    def is_available(self, flag: Optional[str]) -> bool:
        """Return True when ``flag`` is enabled. A ``None`` flag is always available."""
        if flag is None:
            return True
        if flag not in self.FLAGS:
            raise ValueError(f"Unknown metric availability flag: {flag}")
        return getattr(self, flag)

    def as_dict(self) -> dict[str, bool]:
        return {flag: getattr(self, flag) for flag in self.FLAGS}


@dataclass(frozen=True)
class PropertySpec:
    """A persona-specific customer field.

    Exactly one of ``choices`` (categorical) or ``value_range`` (whole
    dollars, inclusive) is set.
    """

    name: str
    choices: tuple[str, ...] = ()
    value_range: Optional[tuple[int, int]] = None

    def __post_init__(self) -> None:
        if bool(self.choices) == (self.value_range is not None):
            raise ValueError(
                f"Property {self.name!r} needs exactly one of choices or value_range"
            )


@dataclass(frozen=True)
class BusinessProfile:
    """Lookup tables for a single business type."""

    key: str
    is_b2b: bool
    subscription_range: AmountRange
    one_time_range: AmountRange
    plan_names: tuple[str, ...]
    descriptions: tuple[str, ...]
    company_prefixes: tuple[str, ...]
    company_suffixes: tuple[str, ...]
    customer_properties: tuple[PropertySpec, ...]
    base_volumes: Mapping[str, int]
    sample_counts: Mapping[str, int]
    monthly_seasonality: tuple[float, ...]
    weekday_seasonality: tuple[float, ...]
    metric_availability: MetricAvailability = field(default_factory=MetricAvailability)

    def __post_init__(self) -> None:
        if len(self.monthly_seasonality) != 12:
            raise ValueError(f"{self.key}: monthly seasonality needs 12 values")
        if len(self.weekday_seasonality) != 7:
            raise ValueError(f"{self.key}: weekday seasonality needs 7 values")
        if not self.plan_names or not self.descriptions:
            raise ValueError(f"{self.key}: plan names and descriptions are required")

    def amount_range(self, kind: str) -> AmountRange:
        if kind == "subscription":
            return self.subscription_range
        if kind == "one_time":
            return self.one_time_range
        raise ValueError(f"Unknown amount kind: {kind!r}")

    @property
    def supports_subscriptions(self) -> bool:
        return not self.subscription_range.is_empty


class BusinessTypeRegistry:
    """Read-only mapping of business type key to :class:`BusinessProfile`."""

    def __init__(
        self,
        profiles: Mapping[str, BusinessProfile],
        aliases: Mapping[str, str] | None = None,
        default_key: str = tables.DEFAULT_TYPE,
    ) -> None:
        if default_key not in profiles:
            raise ValueError(f"Default profile {default_key!r} missing from registry")
        self._profiles = MappingProxyType(dict(profiles))
        self._aliases = MappingProxyType(dict(aliases or {}))
        self._default_key = default_key

    def canonical_key(self, business_type: Optional[str]) -> str:
        """Return the registry key ``business_type`` resolves to."""
        if not business_type:
            return self._default_key
        key = business_type.strip().lower()
        key = self._aliases.get(key, key)
        if key in self._profiles:
            return key
        return self._default_key

    def resolve(self, business_type: Optional[str]) -> BusinessProfile:
        return self._profiles[self.canonical_key(business_type)]

    def is_known(self, business_type: Optional[str]) -> bool:
        return self.canonical_key(business_type) != self._default_key

    @property
    def default(self) -> BusinessProfile:
        return self._profiles[self._default_key]

    def keys(self) -> list[str]:
        return [key for key in self._profiles if key != self._default_key]

    def __contains__(self, business_type: object) -> bool:
        return isinstance(business_type, str) and self.is_known(business_type)

    def __iter__(self) -> Iterator[BusinessProfile]:
        return (self._profiles[key] for key in self.keys())

    def __len__(self) -> int:
        return len(self.keys())


def load_metric_availability(
    path: str | Path | None = None,
) -> dict[str, MetricAvailability]:
    """Load the business type -> availability table from JSON.

    Uses the table shipped with the package unless ``path`` is given.
    """
    if path is None:
        text = (
            resources.files("synthkit.registry")
            .joinpath(METRIC_AVAILABILITY_RESOURCE)
            .read_text(encoding="utf-8")
        )
        source = METRIC_AVAILABILITY_RESOURCE
    else:
        source = str(path)
        text = Path(path).read_text(encoding="utf-8")

    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError(f"Metric availability table in {source} must be an object")

    table = {
        str(key).lower(): MetricAvailability.from_mapping(flags)
        for key, flags in payload.items()
    }
    logger.debug("Loaded metric availability for %d business types from %s", len(table), source)
    return table


def _properties_for(key: str) -> tuple[PropertySpec, ...]:
    specs = []
    for name, spec in tables.CUSTOMER_PROPERTIES.get(key, {}).items():
        if spec and spec[0] == "range":
            specs.append(PropertySpec(name=name, value_range=(spec[1], spec[2])))
        else:
            specs.append(PropertySpec(name=name, choices=tuple(spec)))
    return tuple(specs)


def _build_profile(
    key: str, table_key: str, availability: MetricAvailability
) -> BusinessProfile:
    ranges = tables.AMOUNT_RANGES[table_key]
    prefix_key = table_key if table_key in tables.COMPANY_PREFIXES else tables.DEFAULT_TYPE
    return BusinessProfile(
        key=key,
        is_b2b=table_key in tables.B2B_TYPES,
        subscription_range=AmountRange(*ranges["subscription"]),
        one_time_range=AmountRange(*ranges["one_time"]),
        plan_names=tables.PLAN_NAMES[table_key],
        descriptions=tables.DESCRIPTIONS[table_key],
        company_prefixes=tables.COMPANY_PREFIXES[prefix_key],
        company_suffixes=tables.COMPANY_SUFFIXES[prefix_key],
        customer_properties=_properties_for(table_key),
        base_volumes=MappingProxyType(dict(tables.BASE_VOLUMES[table_key])),
        sample_counts=MappingProxyType(dict(tables.SAMPLE_COUNTS[table_key])),
        monthly_seasonality=tables.SEASONALITY[table_key]["monthly"],
        weekday_seasonality=tables.SEASONALITY[table_key]["weekday"],
        metric_availability=availability,
    )


def load_registry(
    metric_availability_path: str | Path | None = None,
) -> BusinessTypeRegistry:
    """Build a registry from the static tables and an availability table.

    Business types that only appear in the availability file are added with
    the default lookup tables, so new types can be introduced without code
    changes.
    """
    availability = load_metric_availability(metric_availability_path)

    profiles: dict[str, BusinessProfile] = {}
    for key in tables.CANONICAL_TYPES:
        profiles[key] = _build_profile(
            key, key, availability.get(key, MetricAvailability())
        )
    for key, flags in availability.items():
        if key not in profiles and key != tables.DEFAULT_TYPE:
            logger.info("Registering business type %r with default tables", key)
            profiles[key] = _build_profile(key, tables.DEFAULT_TYPE, flags)
    profiles[tables.DEFAULT_TYPE] = _build_profile(
        tables.DEFAULT_TYPE,
        tables.DEFAULT_TYPE,
        availability.get(tables.DEFAULT_TYPE, MetricAvailability()),
    )

    return BusinessTypeRegistry(profiles, aliases=tables.ALIASES)


@lru_cache(maxsize=1)
def default_registry() -> BusinessTypeRegistry:
    """Registry built once per process from the packaged (or configured) tables."""
    from synthkit.config import Settings

    return load_registry(Settings.from_env().metric_availability_path)
