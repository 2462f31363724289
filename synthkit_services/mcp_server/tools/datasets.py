"""Dataset store tools: publish generated datasets and load them back."""

import structlog
from fastmcp import Context
from pydantic import BaseModel, Field

from synthkit.exceptions import DatasetStoreError
from synthkit.storage.dataset_store import DatasetStore, compute_checksum
from synthkit.synthetic.assembler import DEFAULT_SEED, GenerationConfig
from synthkit_services.mcp_server.instance import mcp
from synthkit_services.mcp_server.state import get_server_state

logger = structlog.get_logger(__name__)


class PublishDatasetRequest(BaseModel):
    """Request to generate and publish a scenario dataset."""

    business_type: str = Field(default="b2b-saas-subscriptions")
    stage: str = Field(default="growth")
    seed: int = Field(default=DEFAULT_SEED)
    role: str = Field(default="default", description="Persona role used in the id")
    counts: dict[str, int] | None = Field(
        default=None,
        description="Optional record counts; only used when the dataset is not "
        "already published",
    )


class PublishDatasetResponse(BaseModel):
    id: str
    url: str | None = None
    created: bool
    saved: bool = Field(
        default=True, description="False when the store could not be written"
    )
    error: str | None = None
    data: dict | None = Field(
        default=None, description="The generated dataset when it could not be saved"
    )


class LoadDatasetRequest(BaseModel):
    """Request to load a published dataset."""

    dataset_id: str = Field(
        description="Dataset id, e.g. scenario-checkout-ecommerce-default-growth-12345"
    )
    include_data: bool = Field(default=False, description="Return the full payload")


class LoadDatasetResponse(BaseModel):
    dataset_id: str
    found: bool
    url: str | None = None
    checksum_valid: bool | None = None
    metadata: dict | None = None
    record_counts: dict[str, int] | None = None
    data: dict | None = None


async def _publish_dataset_impl(
    request: PublishDatasetRequest,
    ctx: Context,
    store: DatasetStore | None = None,
) -> PublishDatasetResponse:
    """Implementation of dataset publishing.

    Args:
        request: Scenario parameters
        ctx: MCP context
        store: Optional store (defaults to the one built from settings)
    """
    store = store or get_server_state().store
    config = GenerationConfig(
        business_type=request.business_type,
        stage=request.stage,
        seed=request.seed,
        counts=request.counts,
    )
    try:
        result = store.publish_scenario(config, role=request.role)
    except DatasetStoreError as e:
        if e.dataset is None:
            raise
        await ctx.warning(f"Dataset {e.dataset_id} was generated but not saved: {e}")
        logger.error("dataset_publish_failed", dataset_id=e.dataset_id, error=str(e))
        return PublishDatasetResponse(
            id=e.dataset_id,
            created=False,
            saved=False,
            error=str(e),
            data=e.dataset.to_dict(),
        )

    if result.created:
        await ctx.info(f"Published dataset {result.id}")
    else:
        await ctx.info(f"Dataset {result.id} was already published")
    logger.info("dataset_published", dataset_id=result.id, created=result.created)

    return PublishDatasetResponse(id=result.id, url=result.url, created=result.created)


@mcp.tool()
async def publish_dataset(
    request: PublishDatasetRequest, ctx: Context
) -> PublishDatasetResponse:
    """
    Generate a scenario dataset and save it to the dataset store.

    The id is derived from business type, role, stage and seed. Publishing
    an id that already exists returns the existing dataset's URL.

    Returns:
        Dataset id, download URL and whether a new file was written. When
        the store cannot be written the generated dataset is returned in
        ``data`` with ``saved`` set to False.
    """
    return await _publish_dataset_impl(request, ctx)


async def _load_dataset_impl(
    request: LoadDatasetRequest,
    ctx: Context,
    store: DatasetStore | None = None,
) -> LoadDatasetResponse:
    store = store or get_server_state().store
    envelope = store.load(request.dataset_id)
    if envelope is None:
        await ctx.info(f"Dataset {request.dataset_id} not found")
        return LoadDatasetResponse(dataset_id=request.dataset_id, found=False)

    data = envelope["data"]
    metadata = envelope.get("metadata", {})
    checksum_valid = metadata.get("checksum") == compute_checksum(data)
    record_counts = {
        kind: len(records) for kind, records in data.items() if isinstance(records, list)
    }
    logger.info(
        "dataset_loaded",
        dataset_id=request.dataset_id,
        checksum_valid=checksum_valid,
    )

    return LoadDatasetResponse(
        dataset_id=request.dataset_id,
        found=True,
        url=store.url_for(request.dataset_id),
        checksum_valid=checksum_valid,
        metadata=metadata,
        record_counts=record_counts,
        data=data if request.include_data else None,
    )


@mcp.tool()
async def load_dataset(request: LoadDatasetRequest, ctx: Context) -> LoadDatasetResponse:
    """
    Load a published dataset by id.

    A checksum mismatch does not fail the call; it is reported through
    ``checksum_valid`` and the data is still returned.
    """
    return await _load_dataset_impl(request, ctx)
