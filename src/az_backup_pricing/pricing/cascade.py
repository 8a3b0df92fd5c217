"""Ordered fallback stages for pricing lookups.

A lookup is a sequence of :class:`Stage` objects tried in order.  A stage
either yields a result that is accepted, or hands over to the next stage
when it raises a :class:`PricingError` or returns an empty result it does
not accept.  The last stage of every chain never fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Generic, TypeVar

from az_backup_pricing.config import (
    FALLBACK_CURRENCY,
    FALLBACK_ID,
    FALLBACK_METER_NAME,
    FALLBACK_PRICE,
    SQL_DATABASE_SERVICE,
)
from az_backup_pricing.errors import PricingError
from az_backup_pricing.models import PriceItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Stage(Generic[T]):
    """One step of a fallback chain.

    *accept_empty* decides whether an empty result ends the chain (a genuine
    "no data" answer) or moves on to the next stage.
    """

    name: str
    run: Callable[[], list[T]]
    accept_empty: bool = False


def run_cascade(stages: Sequence[Stage[T]]) -> list[T]:
    """Run *stages* in order and return the first accepted result.

    Returns an empty list when every stage failed or came back empty.
    """
    for stage in stages:
        try:
            result = stage.run()
        except PricingError as exc:
            logger.warning("Stage %r failed, falling back: %s", stage.name, exc)
            continue
        if result or stage.accept_empty:
            return result
        logger.info("Stage %r returned no items, falling back", stage.name)
    return []


def make_fallback_item(region: str, normalized_region: str) -> PriceItem:
    """Build the synthetic backup storage record used when the API is unreachable.

    ``location`` keeps the caller's *region* verbatim while
    ``armRegionName`` carries the normalized form.
    """
    return PriceItem(
        currency_code=FALLBACK_CURRENCY,
        tier_minimum_units=0.0,
        retail_price=FALLBACK_PRICE,
        unit_price=FALLBACK_PRICE,
        arm_region_name=normalized_region,
        location=region,
        effective_start_date=datetime.now(UTC).isoformat(),
        meter_id=FALLBACK_ID,
        meter_name=FALLBACK_METER_NAME,
        product_id=FALLBACK_ID,
        sku_id=FALLBACK_ID,
        product_name=SQL_DATABASE_SERVICE,
        sku_name="General Purpose",
        service_name=SQL_DATABASE_SERVICE,
        service_id=FALLBACK_ID,
        service_family="Databases",
        unit_of_measure="GB/Month",
        price_type="Consumption",
    )


def is_fallback_item(item: PriceItem) -> bool:
    """Return True if *item* was synthesized by :func:`make_fallback_item`."""
    return item.meter_id == FALLBACK_ID and item.sku_id == FALLBACK_ID
