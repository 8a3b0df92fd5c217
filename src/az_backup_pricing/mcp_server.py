"""MCP server for Azure SQL Database backup pricing.

Exposes the same pricing lookups and retention planner as the web API as
MCP tools so that AI agents can query them directly.

Run with:
    az-backup-pricing mcp            # stdio transport (default)
    az-backup-pricing mcp -t sse     # SSE transport on $PORT (default 8080)
"""

import json
import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from az_backup_pricing.config import BEST_PRICE_CURRENCY
from az_backup_pricing.models import RetentionPlanRequest, RetentionSettings
from az_backup_pricing.planner import plan_retention
from az_backup_pricing.pricing import get_resolver

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "az-backup-pricing",
    instructions=(
        "Azure SQL Database backup storage pricing tools. "
        "Prices come from the public Azure Retail Prices API and need no "
        "credentials. Records with id fields set to 'fallback' are synthetic "
        "estimates returned when the API could not be reached."
    ),
)


def _dump_items(items: list) -> str:
    return json.dumps([item.to_api() for item in items], indent=2)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool()
def get_sql_backup_pricing(
    region: Annotated[str, Field(description="Azure region name (e.g. eastus).")],
) -> str:
    """Get SQL Database backup storage price records for a region."""
    return _dump_items(get_resolver().get_sql_backup_storage_pricing(region))


@mcp.tool()
def get_ltr_backup_pricing(
    region: Annotated[str, Field(description="Azure region name (e.g. eastus).")],
) -> str:
    """Get SQL Database long-term-retention (LTR) backup price records.

    Falls back to standard backup storage prices when no LTR meter exists
    in the region.
    """
    return _dump_items(get_resolver().get_ltr_backup_storage_pricing(region))


@mcp.tool()
def get_best_ltr_price(
    region: Annotated[str, Field(description="Azure region name (e.g. eastus).")],
) -> str:
    """Get the single LTR price per GB/month to quote, preferring LRS."""
    price = get_resolver().get_best_ltr_price(region)
    return json.dumps({"price": price, "currency": BEST_PRICE_CURRENCY, "region": region}, indent=2)


@mcp.tool()
def get_azure_backup_prices(
    service: Annotated[str, Field(description="Service name (e.g. Backup).")],
    meter_suffix: Annotated[str, Field(description="Suffix the meter name must end with.")],
    region: Annotated[str | None, Field(description="Optional Azure region name.")] = None,
) -> str:
    """Get Standard consumption backup prices for any service and meter suffix."""
    return _dump_items(get_resolver().get_azure_backup_prices(service, meter_suffix, region))


@mcp.tool()
def list_pricing_regions() -> str:
    """List ARM region names where SQL Database is priced, sorted."""
    return json.dumps(get_resolver().get_available_regions(), indent=2)


@mcp.tool()
def plan_retention_cost(
    region: Annotated[str, Field(description="Azure region name (e.g. eastus).")],
    db_size_gb: Annotated[float, Field(description="Current database size in GB.", ge=0)],
    weekly: Annotated[int, Field(description="Weekly LTR backups kept.", ge=0)] = 0,
    monthly: Annotated[int, Field(description="Monthly LTR backups kept.", ge=0)] = 0,
    yearly: Annotated[int, Field(description="Yearly LTR backups kept.", ge=0)] = 0,
    growth_rate: Annotated[float, Field(description="Annual growth rate in percent.")] = 0.0,
    timeline_years: Annotated[float, Field(description="Timeline length in years.", gt=0)] = 1.0,
) -> str:
    """Estimate LTR retention storage costs for a database.

    Returns the current monthly/yearly cost per backup tier, priced with
    the region's best LTR price, and a monthly cost timeline.
    """
    request = RetentionPlanRequest(
        region=region,
        dbSize=db_size_gb,
        growthRate=growth_rate,
        retention=RetentionSettings(weekly=weekly, monthly=monthly, yearly=yearly),
        timelineYears=timeline_years,
    )
    return json.dumps(plan_retention(request, get_resolver()).model_dump(), indent=2)
