"""Dataset generation and business type detection tools."""

import structlog
from fastmcp import Context
from pydantic import BaseModel, Field

from synthkit.registry.classification import classify_business_type
from synthkit.registry.profiles import default_registry
from synthkit.synthetic.assembler import DEFAULT_SEED, GenerationConfig, assemble
from synthkit.synthetic.validation import validate_dataset
from synthkit_services.mcp_server.cache import DatasetCache, get_dataset_cache
from synthkit_services.mcp_server.instance import mcp

logger = structlog.get_logger(__name__)


class GenerateDatasetRequest(BaseModel):
    """Request to generate a synthetic dataset."""

    business_type: str = Field(
        default="b2b-saas-subscriptions",
        description="Business type key or alias (e.g. 'checkout-ecommerce', 'saas'). "
        "Unknown values use the default profile.",
    )
    stage: str = Field(
        default="growth", description="Business stage: early, growth or enterprise"
    )
    seed: int = Field(default=DEFAULT_SEED, description="Seed for deterministic output")
    counts: dict[str, int] | None = Field(
        default=None,
        description="Optional record counts (customers, plans, subscriptions, "
        "invoices, charges); missing kinds use scaled defaults",
    )
    include_data: bool = Field(
        default=False, description="Return the full dataset payload"
    )
    include_time_series: bool = Field(
        default=False, description="Attach metric time series to the payload"
    )
    run_validation: bool = Field(
        default=True, description="Run referential and temporal checks"
    )


class GenerateDatasetResponse(BaseModel):
    """Summary of a generated dataset."""

    business_type: str
    resolved_business_type: str
    stage: str
    seed: int
    counts: dict[str, int]
    business_metrics: dict[str, float]
    metric_names: list[str]
    validation: dict[str, dict] | None = None
    cached: bool = False
    data: dict | None = None


class DetectBusinessTypeRequest(BaseModel):
    """Request to classify a free-text business description."""

    description: str = Field(description="Free-text description of the business")


class DetectBusinessTypeResponse(BaseModel):
    business_type: str
    is_b2b: bool
    metric_availability: dict[str, bool]


async def _generate_dataset_impl(
    request: GenerateDatasetRequest,
    ctx: Context,
    cache: DatasetCache | None = None,
) -> GenerateDatasetResponse:
    """Implementation of dataset generation.

    Args:
        request: Generation parameters
        ctx: MCP context
        cache: Optional cache (defaults to the process-wide one)
    """
    cache = cache or get_dataset_cache()
    config = GenerationConfig(
        business_type=request.business_type,
        stage=request.stage,
        seed=request.seed,
        counts=request.counts,
        include_time_series=request.include_time_series,
    )

    dataset = cache.get(config)
    cached = dataset is not None
    if dataset is None:
        await ctx.info(
            f"Generating {request.business_type} dataset "
            f"(stage={config.stage.value}, seed={config.seed})"
        )
        dataset = assemble(config)
        cache.set(config, dataset)

    validation = None
    if request.run_validation:
        results = validate_dataset(dataset)
        validation = {
            name: {"ok": result.ok, "message": result.message}
            for name, result in results.items()
        }
        failed = [name for name, result in results.items() if not result.ok]
        if failed:
            logger.warning("dataset_validation_failed", checks=failed)

    logger.info(
        "dataset_generated",
        business_type=dataset.business_type,
        stage=config.stage.value,
        seed=config.seed,
        cached=cached,
        **dataset.counts.as_dict(),
    )

    return GenerateDatasetResponse(
        business_type=request.business_type,
        resolved_business_type=dataset.business_type,
        stage=config.stage.value,
        seed=config.seed,
        counts=dataset.counts.as_dict(),
        business_metrics=dataset.business_metrics.as_dict(),
        metric_names=[metric.name for metric in dataset.metrics],
        validation=validation,
        cached=cached,
        data=dataset.to_dict() if request.include_data else None,
    )


@mcp.tool()
async def generate_dataset(
    request: GenerateDatasetRequest, ctx: Context
) -> GenerateDatasetResponse:
    """
    Generate a deterministic Stripe-shaped dataset.

    Produces customers, plans, subscriptions, invoices and charges whose
    references are always consistent, plus headline business metrics.
    The same business type, stage, seed and counts always produce the same
    dataset.

    Args:
        request: Generation parameters

    Returns:
        Counts, business metrics, presented metric names, validation results
        and (optionally) the full dataset payload
    """
    return await _generate_dataset_impl(request, ctx)


async def _detect_business_type_impl(
    request: DetectBusinessTypeRequest, ctx: Context
) -> DetectBusinessTypeResponse:
    business_type = classify_business_type(request.description)
    profile = default_registry().resolve(business_type)
    await ctx.info(f"Classified description as {business_type}")
    logger.info("business_type_detected", business_type=business_type)
    return DetectBusinessTypeResponse(
        business_type=business_type,
        is_b2b=profile.is_b2b,
        metric_availability=profile.metric_availability.as_dict(),
    )


@mcp.tool()
async def detect_business_type(
    request: DetectBusinessTypeRequest, ctx: Context
) -> DetectBusinessTypeResponse:
    """
    Map a free-text business description to a business type key.

    Uses an ordered keyword rule list; descriptions matching no rule are
    classified as checkout-ecommerce.
    """
    return await _detect_business_type_impl(request, ctx)
