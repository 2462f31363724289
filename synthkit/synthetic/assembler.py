"""Relational dataset assembly.

Entities are generated in dependency order (customers, plans,
subscriptions, invoices, charges) so each stage only references pools that
already exist. Record ``i`` of a kind uses the seed
``seed + i * stride + salt``; strides and salts differ per kind so the
streams never share a seed.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Mapping, Optional, Union

from synthkit.exceptions import InconsistentStateError, InvalidArgumentError
from synthkit.metrics.business_metrics import BusinessMetrics, calculate_business_metrics
from synthkit.metrics.catalog import MetricData, build_metric_catalog, presented_metrics
from synthkit.registry.profiles import (
    BusinessProfile,
    BusinessTypeRegistry,
    default_registry,
)
from synthkit.synthetic import values
from synthkit.synthetic.entities import (
    Charge,
    Customer,
    Invoice,
    Plan,
    Subscription,
    generate_charge,
    generate_customer,
    generate_invoice,
    generate_plan,
    generate_subscription,
)
from synthkit.synthetic.prng import seeded_choice
from synthkit.synthetic.stage import Stage

logger = logging.getLogger(__name__)

DEFAULT_SEED = 12345
DEFAULT_PLAN_COUNT = 5
SEED_MIN = -(2**31)
SEED_MAX = 2**32 - 1

# (stride, salt) per entity kind
SEED_STREAMS = {
    "customers": (1000, 0),
    "plans": (2000, 101),
    "subscriptions": (3000, 211),
    "invoices": (4000, 307),
    "charges": (5000, 401),
}
# Offsets for picking parents, clear of field offsets and id characters
PICK_OFFSET = 20


def record_seed(seed: int, kind: str, index: int) -> int:
    stride, salt = SEED_STREAMS[kind]
    return seed + index * stride + salt


@dataclass(frozen=True)
class DatasetCounts:
    """Number of records to generate per entity kind."""

    FIELDS: ClassVar[tuple[str, ...]] = (
        "customers",
        "plans",
        "subscriptions",
        "invoices",
        "charges",
    )

    customers: int = 0
    plans: int = 0
    subscriptions: int = 0
    invoices: int = 0
    charges: int = 0

    def __post_init__(self) -> None:
        for name in self.FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(f"{name} count must be an integer: {value!r}")
            if value < 0:
                raise InvalidArgumentError(f"{name} count cannot be negative: {value}")

    @classmethod
    def defaults(cls, profile: BusinessProfile, stage: Stage) -> "DatasetCounts":
        """Sample sizes for the business type, scaled by the stage."""
        scaled = {
            name: int(round(profile.sample_counts.get(name, 0) * stage.count_multiplier))
            for name in cls.FIELDS
            if name != "plans"
        }
        return cls(plans=DEFAULT_PLAN_COUNT, **scaled)

    @classmethod
    def from_mapping(
        cls,
        counts: Mapping[str, int],
        profile: BusinessProfile,
        stage: Stage,
    ) -> "DatasetCounts":
        """Fill keys missing from ``counts`` with :meth:`defaults`."""
        unknown = set(counts) - set(cls.FIELDS)
        if unknown:
            raise InvalidArgumentError(f"Unknown count keys: {sorted(unknown)}")
        return cls(**{**cls.defaults(profile, stage).as_dict(), **counts})

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in self.FIELDS}


CountsInput = Union[DatasetCounts, Mapping[str, int], None]


@dataclass(frozen=True)
class GenerationConfig:
    """Everything a generation request depends on.

    Attributes
    ----------
    business_type:
        Business type key or alias; unknown values use the default profile.
    stage:
        ``Stage`` or stage name (``early``, ``growth``, ``enterprise``).
    seed:
        Integer seed in the 32-bit range.
    counts:
        ``DatasetCounts``, a partial mapping, or ``None`` for defaults.
    reference_time:
        Timezone-aware instant that generated timestamps count back from.
    include_time_series:
        Attach daily/weekly/monthly series to each presented metric.
    """

    business_type: str
    stage: Stage = Stage.GROWTH
    seed: int = DEFAULT_SEED
    counts: CountsInput = None
    reference_time: datetime = values.DEFAULT_REFERENCE_TIME
    include_time_series: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "stage", Stage.parse(self.stage))
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise InvalidArgumentError(f"seed must be an integer: {self.seed!r}")
        if not SEED_MIN <= self.seed <= SEED_MAX:
            raise InvalidArgumentError(f"seed out of 32-bit range: {self.seed}")
        if self.reference_time.tzinfo is None:
            raise InvalidArgumentError("reference_time must be timezone-aware")
        if self.counts is not None and not isinstance(self.counts, DatasetCounts):
            object.__setattr__(self, "counts", dict(self.counts))

    def resolve_counts(self, profile: BusinessProfile) -> DatasetCounts:
        if isinstance(self.counts, DatasetCounts):
            return self.counts
        if self.counts is None:
            return DatasetCounts.defaults(profile, self.stage)
        return DatasetCounts.from_mapping(self.counts, profile, self.stage)

    def cache_key(self) -> tuple:
        """Hashable key identifying the generated output."""
        if isinstance(self.counts, DatasetCounts):
            counts = tuple(sorted(self.counts.as_dict().items()))
        elif self.counts is None:
            counts = None
        else:
            counts = tuple(sorted(self.counts.items()))
        return (
            self.business_type.strip().lower(),
            self.stage.value,
            self.seed,
            counts,
            self.reference_time.isoformat(),
            self.include_time_series,
        )


@dataclass(frozen=True)
class Dataset:
    """An assembled, internally consistent dataset."""

    config: GenerationConfig
    profile: BusinessProfile
    counts: DatasetCounts
    customers: tuple[Customer, ...]
    plans: tuple[Plan, ...]
    subscriptions: tuple[Subscription, ...]
    invoices: tuple[Invoice, ...]
    charges: tuple[Charge, ...]
    business_metrics: BusinessMetrics
    metrics: tuple[MetricData, ...]

    @property
    def business_type(self) -> str:
        return self.profile.key

    def estimated_volumes(self) -> dict[str, int]:
        """Production-scale record volumes for the business type and stage."""
        multiplier = self.config.stage.volume_multiplier
        return {
            name: int(round(volume * multiplier))
            for name, volume in self.profile.base_volumes.items()
        }

    @property
    def metadata(self) -> dict[str, object]:
        return {
            "businessType": self.config.business_type,
            "resolvedBusinessType": self.profile.key,
            "stage": self.config.stage.value,
            "seed": self.config.seed,
            "counts": self.counts.as_dict(),
            "referenceTime": self.config.reference_time.isoformat(),
            "metricNames": [metric.name for metric in self.metrics],
            "metricAvailability": self.profile.metric_availability.as_dict(),
            "estimatedVolumes": self.estimated_volumes(),
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "customers": [c.as_dict() for c in self.customers],
            "plans": [p.as_dict() for p in self.plans],
            "subscriptions": [s.as_dict() for s in self.subscriptions],
            "invoices": [i.as_dict() for i in self.invoices],
            "charges": [c.as_dict() for c in self.charges],
            "businessMetrics": self.business_metrics.as_dict(),
            "metrics": [m.as_dict() for m in self.metrics],
            "metadata": self.metadata,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Canonical JSON; identical configs produce identical strings."""
        return json.dumps(self.to_dict(), sort_keys=True, indent=indent)


def _check_pools(counts: DatasetCounts) -> None:
    if counts.subscriptions and not counts.customers:
        raise InconsistentStateError("Cannot generate subscriptions without customers")
    if counts.subscriptions and not counts.plans:
        raise InconsistentStateError("Cannot generate subscriptions without plans")
    if counts.invoices and not counts.customers:
        raise InconsistentStateError("Cannot generate invoices without customers")
    if counts.charges and not counts.customers:
        raise InconsistentStateError("Cannot generate charges without customers")


def assemble(
    config: GenerationConfig, registry: Optional[BusinessTypeRegistry] = None
) -> Dataset:
    """Generate a complete dataset for ``config``.

    Raises
    ------
    InconsistentStateError
        If a dependent pool is requested while a pool it references is empty.
    """
    registry = registry or default_registry()
    profile = registry.resolve(config.business_type)
    if not registry.is_known(config.business_type):
        logger.info(
            "Unknown business type %r, using default tables", config.business_type
        )
    counts = config.resolve_counts(profile)
    _check_pools(counts)

    stage = config.stage
    seed = config.seed
    reference_time = config.reference_time

    customers = tuple(
        generate_customer(
            record_seed(seed, "customers", i), profile, stage, reference_time=reference_time
        )
        for i in range(counts.customers)
    )
    plans = tuple(
        generate_plan(record_seed(seed, "plans", i), profile, stage)
        for i in range(counts.plans)
    )

    subscriptions = []
    for i in range(counts.subscriptions):
        sub_seed = record_seed(seed, "subscriptions", i)
        subscriptions.append(
            generate_subscription(
                sub_seed,
                seeded_choice(sub_seed + PICK_OFFSET, customers),
                seeded_choice(sub_seed + PICK_OFFSET + 1, plans),
                reference_time=reference_time,
            )
        )

    invoices = []
    for i in range(counts.invoices):
        invoice_seed = record_seed(seed, "invoices", i)
        if subscriptions:
            parent = {"subscription": seeded_choice(invoice_seed + PICK_OFFSET, subscriptions)}
        else:
            parent = {"customer": seeded_choice(invoice_seed + PICK_OFFSET, customers)}
        invoices.append(
            generate_invoice(
                invoice_seed, profile, stage, reference_time=reference_time, **parent
            )
        )

    charges = tuple(
        generate_charge(
            record_seed(seed, "charges", i),
            profile,
            stage,
            customers=customers,
            invoices=invoices,
            reference_time=reference_time,
        )
        for i in range(counts.charges)
    )

    business_metrics = calculate_business_metrics(
        customers, subscriptions, charges, stage=stage, seed=seed, invoices=invoices
    )
    catalog = build_metric_catalog(
        business_metrics,
        profile,
        seed,
        reference_time=reference_time,
        include_time_series=config.include_time_series,
    )

    logger.info(
        f"Generated {profile.key} dataset (stage={stage.value}, seed={seed}): "
        f"{counts.customers} customers, {counts.subscriptions} subscriptions, "
        f"{counts.invoices} invoices, {counts.charges} charges"
    )
    return Dataset(
        config=config,
        profile=profile,
        counts=counts,
        customers=customers,
        plans=plans,
        subscriptions=tuple(subscriptions),
        invoices=tuple(invoices),
        charges=charges,
        business_metrics=business_metrics,
        metrics=tuple(presented_metrics(catalog)),
    )


def generate_dataset(
    business_type: str,
    stage: Union[Stage, str] = Stage.GROWTH,
    seed: int = DEFAULT_SEED,
    counts: CountsInput = None,
    *,
    reference_time: datetime = values.DEFAULT_REFERENCE_TIME,
    include_time_series: bool = True,
    registry: Optional[BusinessTypeRegistry] = None,
) -> Dataset:
    """Generate a deterministic Stripe-shaped dataset.

    Parameters
    ----------
    business_type:
        Business type key or alias, e.g. ``"b2b-saas-subscriptions"``.
    stage:
        ``early``, ``growth`` or ``enterprise``.
    seed:
        Integer seed; identical arguments always give identical output.
    counts:
        Record counts per kind. Missing kinds use the scaled defaults.

    Examples
    --------
    >>> ds = generate_dataset("b2b-saas-subscriptions", "growth", 12345,
    ...                       {"customers": 25, "subscriptions": 15,
    ...                        "invoices": 20, "charges": 40})
    >>> len(ds.customers)
    25
    """
    config = GenerationConfig(
        business_type=business_type,
        stage=stage,
        seed=seed,
        counts=counts,
        reference_time=reference_time,
        include_time_series=include_time_series,
    )
    return assemble(config, registry)
