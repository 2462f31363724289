"""Tests for the health check tool."""

import json
from unittest.mock import AsyncMock

import pytest

from synthkit.exceptions import DatasetStoreError
from synthkit.storage.dataset_store import DatasetStore
from synthkit_services.mcp_server.cache import DatasetCache
from synthkit_services.mcp_server.state import get_server_state
from synthkit_services.mcp_server.tools.health_check import _health_check_impl


def create_mock_context():
    ctx = AsyncMock()
    ctx.info = AsyncMock()
    return ctx


@pytest.mark.asyncio
async def test_health_check_healthy(tmp_path):
    store = DatasetStore(tmp_path)
    store.save("one", {})

    response = await _health_check_impl(
        create_mock_context(), store=store, cache=DatasetCache()
    )

    assert response.status == "healthy"
    assert response.checks["mcp_server"] == "healthy"
    assert response.checks["dataset_store"] == "healthy (1 datasets)"
    assert response.checks["registry"].startswith("healthy")
    assert "checkout-ecommerce" in response.business_types
    assert response.cache_stats["size"] == 0
    assert response.uptime_seconds >= 0


@pytest.mark.asyncio
async def test_health_check_store_not_created_yet(tmp_path):
    store = DatasetStore(tmp_path / "later")
    response = await _health_check_impl(
        create_mock_context(), store=store, cache=DatasetCache()
    )
    assert response.status == "healthy"
    assert response.checks["dataset_store"].startswith("empty")


@pytest.mark.asyncio
async def test_health_check_degraded_when_store_path_is_a_file(tmp_path):
    blocker = tmp_path / "datasets"
    blocker.write_text("")

    response = await _health_check_impl(
        create_mock_context(), store=DatasetStore(blocker), cache=DatasetCache()
    )

    assert response.status == "degraded"
    assert response.checks["dataset_store"].startswith("unhealthy")


class UnreadableStore(DatasetStore):
    def list_ids(self):
        raise DatasetStoreError(f"Cannot list datasets in {self.data_dir}: permission denied")


@pytest.mark.asyncio
async def test_health_check_unhealthy_when_store_cannot_be_listed(tmp_path):
    response = await _health_check_impl(
        create_mock_context(), store=UnreadableStore(tmp_path), cache=DatasetCache()
    )

    assert response.status == "unhealthy"
    assert response.checks["dataset_store"].startswith("unhealthy: Cannot list datasets")
    assert response.checks["registry"].startswith("healthy")


@pytest.mark.asyncio
async def test_health_check_reports_malformed_availability_file(tmp_path, monkeypatch):
    path = tmp_path / "availability.json"
    path.write_text(json.dumps({"checkout-ecommerce": {"refunds": "false"}}))
    monkeypatch.setenv("SYNTHKIT_METRIC_AVAILABILITY", str(path))
    state = get_server_state()
    state.reset()
    try:
        response = await _health_check_impl(
            create_mock_context(), store=DatasetStore(tmp_path), cache=DatasetCache()
        )
    finally:
        monkeypatch.undo()
        state.reset()

    assert response.status == "unhealthy"
    assert "must be true or false" in response.checks["registry"]
