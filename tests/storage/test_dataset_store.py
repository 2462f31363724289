import json
import logging
from datetime import datetime, timezone

import pytest

from synthkit import DatasetStoreError, GenerationConfig, InvalidArgumentError, assemble
from synthkit.config import Settings
from synthkit.storage.dataset_store import (
    DatasetStore,
    compute_checksum,
    scenario_dataset_id,
)

SMALL_COUNTS = {"customers": 3, "subscriptions": 2, "invoices": 2, "charges": 4}


@pytest.fixture
def store(tmp_path) -> DatasetStore:
    return DatasetStore(tmp_path / "datasets", "https://data.example.com/")


def test_scenario_dataset_id() -> None:
    assert (
        scenario_dataset_id("b2b-saas-subscriptions", "Founder", "growth", 12345)
        == "scenario-b2b-saas-subscriptions-founder-growth-12345"
    )
    assert (
        scenario_dataset_id("checkout-ecommerce", "", "startup", 1)
        == "scenario-checkout-ecommerce-default-early-1"
    )


def test_checksum_ignores_key_order() -> None:
    assert compute_checksum({"a": 1, "b": [1, 2]}) == compute_checksum({"b": [1, 2], "a": 1})
    assert compute_checksum({"a": 1}) != compute_checksum({"a": 2})
    assert len(compute_checksum({})) == 32


def test_save_and_load_round_trip(store) -> None:
    created = datetime(2025, 3, 1, tzinfo=timezone.utc)
    url = store.save(
        "sample-1", {"rows": [1, 2, 3]}, metadata={"note": "x"}, created_at=created
    )

    assert url == "https://data.example.com/datasets/sample-1.json"
    assert store.exists("sample-1")

    envelope = store.load("sample-1")
    assert envelope["id"] == "sample-1"
    assert envelope["type"] == "scenario"
    assert envelope["data"] == {"rows": [1, 2, 3]}
    assert envelope["metadata"]["note"] == "x"
    assert envelope["metadata"]["createdAt"] == "2025-03-01T00:00:00+00:00"
    assert envelope["metadata"]["checksum"] == compute_checksum({"rows": [1, 2, 3]})
    assert not list(store.data_dir.glob("*.tmp"))


def test_load_missing_returns_none(store) -> None:
    assert store.load("nothing-here") is None
    assert not store.exists("nothing-here")


def test_checksum_mismatch_is_logged_and_data_returned(store, caplog) -> None:
    store.save("tampered", {"value": 1})
    path = store.path_for("tampered")
    envelope = json.loads(path.read_text())
    envelope["data"]["value"] = 2
    path.write_text(json.dumps(envelope))

    with caplog.at_level(logging.WARNING, logger="synthkit.storage.dataset_store"):
        loaded = store.load("tampered")

    assert loaded["data"] == {"value": 2}
    assert "Checksum mismatch" in caplog.text


def test_corrupt_file_raises_store_error(store) -> None:
    store.data_dir.mkdir(parents=True)
    store.path_for("broken").write_text("{not json")
    with pytest.raises(DatasetStoreError):
        store.load("broken")

    store.path_for("no-envelope").write_text(json.dumps({"id": "no-envelope"}))
    with pytest.raises(DatasetStoreError):
        store.load("no-envelope")


@pytest.mark.parametrize("dataset_id", ["../etc/passwd", "a/b", "", ".hidden", "x.json"])
def test_ids_are_validated(store, dataset_id) -> None:
    with pytest.raises(InvalidArgumentError):
        store.path_for(dataset_id)


def test_save_failure_raises_store_error(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    store = DatasetStore(blocker)
    with pytest.raises(DatasetStoreError):
        store.save("x", {})


def test_list_and_delete(store) -> None:
    assert store.list_ids() == []
    store.save("b-set", {})
    store.save("a-set", {})
    assert store.list_ids() == ["a-set", "b-set"]

    assert store.delete("a-set")
    assert not store.delete("a-set")
    assert store.list_ids() == ["b-set"]


def test_publish_scenario_generates_once(store) -> None:
    config = GenerationConfig("SaaS", stage="growth", seed=12345, counts=SMALL_COUNTS)

    first = store.publish_scenario(config, role="founder")
    assert first.created
    assert first.id == "scenario-b2b-saas-subscriptions-founder-growth-12345"
    assert first.url.endswith(f"/datasets/{first.id}.json")

    envelope = store.load(first.id)
    assert len(envelope["data"]["customers"]) == 3
    assert envelope["metadata"]["scenario"] == {
        "category": "b2b-saas-subscriptions",
        "role": "founder",
        "stage": "growth",
        "id": 12345,
    }

    second = store.publish_scenario(config, role="founder")
    assert not second.created
    assert second.id == first.id


def test_failed_publish_keeps_generated_dataset(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = DatasetStore(blocker / "sub")
    config = GenerationConfig("saas", stage="early", seed=9, counts=SMALL_COUNTS)

    with pytest.raises(DatasetStoreError, match="Failed to save") as excinfo:
        store.publish_scenario(config, role="founder")

    error = excinfo.value
    assert error.dataset_id == "scenario-b2b-saas-subscriptions-founder-early-9"
    assert error.dataset is not None
    assert len(error.dataset.customers) == 3
    assert error.dataset.to_json() == assemble(config).to_json()


def test_from_settings(tmp_path) -> None:
    store = DatasetStore.from_settings(
        Settings(data_dir=tmp_path, base_url="http://localhost:9000")
    )
    assert store.data_dir == tmp_path
    assert store.url_for("abc") == "http://localhost:9000/datasets/abc.json"
