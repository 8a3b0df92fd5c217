"""Reduce lists of price records to a single price or a region catalog."""

from __future__ import annotations

from collections.abc import Iterable

from az_backup_pricing.config import FALLBACK_PRICE
from az_backup_pricing.models import PriceItem


def _is_lrs(item: PriceItem) -> bool:
    return "lrs" in item.meter_name.lower() or "lrs" in item.sku_name.lower()


def select_best_ltr_price(candidates: list[PriceItem]) -> float:
    """Pick the representative LTR price from *candidates*.

    The first LRS record wins (meter or SKU name, case-insensitive).
    Without one, the first record is used as-is.  An empty list yields
    ``FALLBACK_PRICE``.
    """
    if not candidates:
        return FALLBACK_PRICE
    lrs = next((item for item in candidates if _is_lrs(item)), None)
    return (lrs or candidates[0]).retail_price


def aggregate_regions(items: Iterable[PriceItem]) -> list[str]:
    """Return the distinct, non-blank ``armRegionName`` values, sorted."""
    return sorted({item.arm_region_name for item in items if item.arm_region_name.strip()})
