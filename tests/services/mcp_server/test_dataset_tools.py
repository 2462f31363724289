"""Tests for the publish and load dataset tools."""

import json
from unittest.mock import AsyncMock

import pytest

from synthkit.storage.dataset_store import DatasetStore
from synthkit_services.mcp_server.tools.datasets import (
    LoadDatasetRequest,
    PublishDatasetRequest,
    _load_dataset_impl as load_dataset,
    _publish_dataset_impl as publish_dataset,
)

SMALL_COUNTS = {"customers": 4, "subscriptions": 3, "invoices": 3, "charges": 6}


def create_mock_context():
    """Create a mock MCP context."""
    ctx = AsyncMock()
    ctx.info = AsyncMock()
    return ctx


@pytest.fixture
def store(tmp_path):
    return DatasetStore(tmp_path, "http://localhost:3001")


@pytest.mark.asyncio
async def test_publish_then_load(store):
    ctx = create_mock_context()
    request = PublishDatasetRequest(
        business_type="consumer-fitness-app",
        stage="enterprise",
        seed=77,
        role="Coach",
        counts=SMALL_COUNTS,
    )

    published = await publish_dataset(request, ctx, store=store)

    assert published.created
    assert published.id == "scenario-consumer-fitness-app-coach-enterprise-77"
    assert published.url == f"http://localhost:3001/datasets/{published.id}.json"

    loaded = await load_dataset(
        LoadDatasetRequest(dataset_id=published.id, include_data=True), ctx, store=store
    )
    assert loaded.found
    assert loaded.checksum_valid
    assert loaded.record_counts["customers"] == 4
    assert loaded.record_counts["charges"] == 6
    assert loaded.metadata["scenario"]["role"] == "Coach"
    assert loaded.data["metadata"]["stage"] == "enterprise"


@pytest.mark.asyncio
async def test_publish_is_idempotent(store):
    ctx = create_mock_context()
    request = PublishDatasetRequest(seed=5, counts=SMALL_COUNTS)

    first = await publish_dataset(request, ctx, store=store)
    second = await publish_dataset(request, ctx, store=store)

    assert first.created
    assert not second.created
    assert second.url == first.url


@pytest.mark.asyncio
async def test_load_missing_dataset(store):
    ctx = create_mock_context()
    response = await load_dataset(LoadDatasetRequest(dataset_id="nope"), ctx, store=store)
    assert not response.found
    assert response.data is None


@pytest.mark.asyncio
async def test_load_reports_checksum_mismatch(store):
    ctx = create_mock_context()
    store.save("edited", {"customers": [{"id": "cus_1"}]})
    path = store.path_for("edited")
    envelope = json.loads(path.read_text())
    envelope["data"]["customers"].append({"id": "cus_2"})
    path.write_text(json.dumps(envelope))

    response = await load_dataset(LoadDatasetRequest(dataset_id="edited"), ctx, store=store)

    assert response.found
    assert response.checksum_valid is False
    assert response.record_counts == {"customers": 2}
    assert response.data is None


@pytest.mark.asyncio
async def test_publish_returns_dataset_when_store_is_unwritable(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    ctx = create_mock_context()
    request = PublishDatasetRequest(seed=6, counts=SMALL_COUNTS)

    response = await publish_dataset(request, ctx, store=DatasetStore(blocker / "sub"))

    assert not response.saved
    assert not response.created
    assert response.url is None
    assert response.id == "scenario-b2b-saas-subscriptions-default-growth-6"
    assert "Failed to save" in response.error
    assert len(response.data["customers"]) == 4
    assert len(response.data["charges"]) == 6
    ctx.warning.assert_awaited_once()


@pytest.mark.asyncio
async def test_publish_success_reports_saved(store):
    response = await publish_dataset(
        PublishDatasetRequest(seed=8, counts=SMALL_COUNTS), create_mock_context(), store=store
    )
    assert response.saved
    assert response.error is None
    assert response.data is None
