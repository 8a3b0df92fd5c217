"""Pricing API routes – thin wrappers over :class:`PricingResolver`."""

import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from az_backup_pricing.config import BEST_PRICE_CURRENCY
from az_backup_pricing.models import ApiResponse, BestPrice, RegionList, RetentionPlanRequest
from az_backup_pricing.planner import plan_retention
from az_backup_pricing.pricing import PricingResolver, get_resolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pricing"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _respond(label: str, produce: Callable[[], Any]) -> JSONResponse:
    """Run *produce* and wrap its result (or failure) in an ``ApiResponse``."""
    try:
        data = produce()
    except Exception as exc:
        logger.exception("Error fetching %s", label)
        body = ApiResponse.fail(f"Failed to fetch {label}: {exc}")
        return JSONResponse(body.model_dump(mode="json"), status_code=500)
    body = ApiResponse.ok(data)
    return JSONResponse(body.model_dump(mode="json", by_alias=True))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/api/pricing/sql-backup/{region}", summary="SQL Database backup storage prices")
def get_sql_backup_pricing(
    region: str,
    resolver: PricingResolver = Depends(get_resolver),
) -> JSONResponse:
    """Return backup storage price records for *region*."""
    return _respond("pricing", lambda: resolver.get_sql_backup_storage_pricing(region))


@router.get("/api/pricing/ltr-backup/{region}", summary="SQL Database LTR backup prices")
def get_ltr_backup_pricing(
    region: str,
    resolver: PricingResolver = Depends(get_resolver),
) -> JSONResponse:
    """Return long-term-retention price records for *region*."""
    return _respond("LTR pricing", lambda: resolver.get_ltr_backup_storage_pricing(region))


@router.get("/api/pricing/best-ltr/{region}", summary="Best LTR backup price")
def get_best_ltr_pricing(
    region: str,
    resolver: PricingResolver = Depends(get_resolver),
) -> JSONResponse:
    """Return the single LTR price per GB/month to quote for *region*."""
    return _respond(
        "best LTR pricing",
        lambda: BestPrice(
            price=resolver.get_best_ltr_price(region),
            currency=BEST_PRICE_CURRENCY,
            region=region,
        ),
    )


@router.get("/api/pricing/azure-backup", summary="Backup prices for any service")
def get_azure_backup_pricing(
    service: str = Query(..., description="Service name (e.g. Backup)."),
    meter_suffix: str = Query(..., description="Suffix the meter name must end with."),
    region: str | None = Query(None, description="Optional Azure region name."),
    resolver: PricingResolver = Depends(get_resolver),
) -> JSONResponse:
    """Return Standard consumption ``Backup`` prices matching the meter suffix."""
    return _respond(
        "backup pricing",
        lambda: resolver.get_azure_backup_prices(service, meter_suffix, region),
    )


@router.get("/api/regions", summary="List regions offering SQL Database")
def get_available_regions(
    resolver: PricingResolver = Depends(get_resolver),
) -> JSONResponse:
    """Return the sorted, de-duplicated ARM region names."""
    return _respond("regions", lambda: RegionList(regions=resolver.get_available_regions()))


@router.post(
    "/api/planner/retention-cost",
    tags=["Planner"],
    summary="Estimate LTR retention costs",
)
def plan_retention_cost(
    body: RetentionPlanRequest,
    resolver: PricingResolver = Depends(get_resolver),
) -> JSONResponse:
    """Return today's retention cost breakdown and a cost timeline.

    Backups are priced with the region's best LTR price unless the body
    carries an explicit ``storagePrice``.
    """
    return _respond("retention plan", lambda: plan_retention(body, resolver))
