"""Tests for the in-memory dataset cache."""

import pytest

from synthkit import GenerationConfig, generate_dataset
from synthkit_services.mcp_server.cache import DatasetCache

COUNTS = {"customers": 2, "subscriptions": 0, "invoices": 0, "charges": 2}


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture(scope="module")
def dataset():
    return generate_dataset("checkout-ecommerce", counts=COUNTS, include_time_series=False)


def config(seed: int = 1) -> GenerationConfig:
    return GenerationConfig("checkout-ecommerce", seed=seed, counts=COUNTS)


def test_miss_then_hit(dataset):
    cache = DatasetCache(max_size=5)

    assert cache.get(config()) is None
    cache.set(config(), dataset)
    assert cache.get(config()) is dataset

    stats = cache.get_stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 0.5
    assert stats["size"] == 1


def test_key_ignores_business_type_case():
    assert DatasetCache.make_key(config()) == DatasetCache.make_key(
        GenerationConfig("Checkout-Ecommerce", seed=1, counts=COUNTS)
    )
    assert DatasetCache.make_key(config(1)) != DatasetCache.make_key(config(2))
    assert len(DatasetCache.make_key(config())) == 64


def test_entries_expire(dataset):
    clock = FakeClock()
    cache = DatasetCache(max_size=5, ttl_seconds=60, clock=clock)
    cache.set(config(), dataset)

    clock.now += 59
    assert cache.get(config()) is dataset

    clock.now += 2
    assert cache.get(config()) is None
    assert cache.get_stats()["size"] == 0


def test_least_recently_used_entry_is_evicted(dataset):
    cache = DatasetCache(max_size=2)
    cache.set(config(1), dataset)
    cache.set(config(2), dataset)
    cache.get(config(1))
    cache.set(config(3), dataset)

    assert cache.get(config(2)) is None
    assert cache.get(config(1)) is dataset
    assert cache.get(config(3)) is dataset
    assert cache.get_stats()["evictions"] == 1


def test_clear(dataset):
    cache = DatasetCache()
    cache.set(config(), dataset)
    cache.clear()
    assert cache.get_stats()["size"] == 0


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        DatasetCache(max_size=0)
