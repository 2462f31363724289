import json

import pytest

from synthkit.registry import tables
from synthkit.registry.profiles import (
    AmountRange,
    BusinessTypeRegistry,
    MetricAvailability,
    PropertySpec,
    default_registry,
    load_metric_availability,
    load_registry,
)


@pytest.fixture
def registry() -> BusinessTypeRegistry:
    return load_registry()


def test_registry_contains_canonical_types(registry: BusinessTypeRegistry) -> None:
    assert set(registry.keys()) == set(tables.CANONICAL_TYPES)
    assert len(registry) == len(tables.CANONICAL_TYPES)
    assert "checkout-ecommerce" in registry
    assert "default" not in registry.keys()


def test_aliases_resolve_case_insensitively(registry: BusinessTypeRegistry) -> None:
    assert registry.canonical_key("SaaS") == "b2b-saas-subscriptions"
    assert registry.canonical_key("ecommerce") == "checkout-ecommerce"
    assert registry.resolve("Forksy").key == "food-delivery-platform"


def test_unknown_type_resolves_to_default(registry: BusinessTypeRegistry) -> None:
    profile = registry.resolve("underwater-basket-weaving")
    assert profile.key == "default"
    assert profile is registry.default
    assert not registry.is_known("underwater-basket-weaving")
    assert registry.resolve(None).key == "default"
    assert registry.resolve("").key == "default"


def test_b2b_flag(registry: BusinessTypeRegistry) -> None:
    assert registry.resolve("b2b-saas-subscriptions").is_b2b
    assert registry.resolve("b2b-invoicing").is_b2b
    assert not registry.resolve("consumer-fitness-app").is_b2b


def test_metric_availability_for_ecommerce(registry: BusinessTypeRegistry) -> None:
    availability = registry.resolve("checkout-ecommerce").metric_availability
    assert not availability.subscriptions
    assert availability.is_available(None)
    assert availability.is_available("refunds")
    assert not availability.is_available("subscriptions")


def test_types_without_recurring_revenue_have_empty_subscription_range(
    registry: BusinessTypeRegistry,
) -> None:
    for key in ("b2b-invoicing", "property-management-platform", "donation-marketplace"):
        profile = registry.resolve(key)
        assert not profile.supports_subscriptions
        assert profile.subscription_range.is_empty
        assert not profile.one_time_range.is_empty


def test_amount_range_lookup(registry: BusinessTypeRegistry) -> None:
    profile = registry.resolve("checkout-ecommerce")
    assert profile.amount_range("one_time") == profile.one_time_range
    assert profile.amount_range("subscription") == profile.subscription_range
    with pytest.raises(ValueError):
        profile.amount_range("refund")


def test_every_profile_has_complete_tables(registry: BusinessTypeRegistry) -> None:
    for profile in list(registry) + [registry.default]:
        assert len(profile.monthly_seasonality) == 12
        assert len(profile.weekday_seasonality) == 7
        assert profile.plan_names
        assert profile.descriptions
        assert profile.company_prefixes and profile.company_suffixes


def test_availability_file_can_add_new_types(tmp_path) -> None:
    path = tmp_path / "availability.json"
    path.write_text(
        json.dumps(
            {
                "checkout-ecommerce": {"subscriptions": True},
                "pet-grooming": {"refunds": True},
            }
        )
    )

    registry = load_registry(path)

    assert "pet-grooming" in registry
    groomer = registry.resolve("pet-grooming")
    assert groomer.metric_availability.refunds
    assert groomer.plan_names == registry.default.plan_names
    assert registry.resolve("checkout-ecommerce").metric_availability.subscriptions
    # Types missing from the file get every flag off
    assert not registry.resolve("creator-platform").metric_availability.subscriptions


def test_availability_file_rejects_unknown_flags(tmp_path) -> None:
    path = tmp_path / "availability.json"
    path.write_text(json.dumps({"checkout-ecommerce": {"crypto": True}}))
    with pytest.raises(ValueError, match="Unknown metric availability flags"):
        load_metric_availability(path)


def test_availability_file_must_be_an_object(tmp_path) -> None:
    path = tmp_path / "availability.json"
    path.write_text("[]")
    with pytest.raises(ValueError):
        load_metric_availability(path)


@pytest.mark.parametrize(
    "entry",
    [
        {"subscriptions": "false"},
        {"refunds": 1},
        {"radar": None},
    ],
)
def test_availability_flags_must_be_booleans(tmp_path, entry) -> None:
    path = tmp_path / "availability.json"
    path.write_text(json.dumps({"checkout-ecommerce": entry}))
    with pytest.raises(ValueError, match="must be true or false"):
        load_metric_availability(path)


@pytest.mark.parametrize("entry", [["refunds"], "refunds", True, None])
def test_availability_entries_must_be_objects(tmp_path, entry) -> None:
    path = tmp_path / "availability.json"
    path.write_text(json.dumps({"checkout-ecommerce": entry}))
    with pytest.raises(ValueError, match="must be an object"):
        load_metric_availability(path)


def test_packaged_availability_table_loads() -> None:
    table = load_metric_availability()
    assert table["b2b-saas-subscriptions"].subscriptions
    assert table["b2b-saas-subscriptions"].as_dict() == {
        "subscriptions": True,
        "radar": True,
        "disputes": True,
        "refunds": True,
        "authentication": True,
    }


def test_default_registry_is_cached() -> None:
    assert default_registry() is default_registry()


def test_value_objects_validate() -> None:
    with pytest.raises(ValueError):
        AmountRange(-1, 10)
    with pytest.raises(ValueError):
        AmountRange(10, 5)
    with pytest.raises(ValueError):
        PropertySpec("tier")
    with pytest.raises(ValueError):
        PropertySpec("tier", choices=("a",), value_range=(1, 2))
    with pytest.raises(ValueError):
        MetricAvailability().is_available("crypto")


def test_registry_requires_default_profile(registry: BusinessTypeRegistry) -> None:
    with pytest.raises(ValueError):
        BusinessTypeRegistry({"checkout-ecommerce": registry.resolve("checkout-ecommerce")})
