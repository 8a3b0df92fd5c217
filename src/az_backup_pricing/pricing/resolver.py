"""Pricing Resolver – the caller-facing SQL backup pricing operations."""

from __future__ import annotations

import logging
from functools import lru_cache

from az_backup_pricing.config import FALLBACK_REGIONS, PricingSettings, settings
from az_backup_pricing.models import PriceItem
from az_backup_pricing.pricing.cascade import Stage, make_fallback_item, run_cascade
from az_backup_pricing.pricing.client import RetailPricesClient
from az_backup_pricing.pricing.filters import (
    build_backup_storage_filter,
    build_generic_backup_filter,
    build_ltr_filter,
    build_region_discovery_filter,
    normalize_region,
)
from az_backup_pricing.pricing.selection import aggregate_regions, select_best_ltr_price

logger = logging.getLogger(__name__)


class PricingResolver:
    """Resolve SQL Database backup prices with fallbacks.

    Holds no per-call state: a single instance is shared by all callers.
    """

    def __init__(self, client: RetailPricesClient) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, cfg: PricingSettings) -> PricingResolver:
        return cls(
            RetailPricesClient(
                cfg.retail_prices_url,
                timeout=cfg.request_timeout,
                max_retries=cfg.max_retries,
            )
        )

    def get_sql_backup_storage_pricing(self, region: str) -> list[PriceItem]:
        """Return backup storage prices for *region*.

        An empty upstream answer is returned as-is; a failed request yields
        one synthetic record priced at ``FALLBACK_PRICE``.
        """
        normalized = normalize_region(region)
        return run_cascade(
            [
                Stage(
                    "backup-storage",
                    lambda: self.client.fetch(build_backup_storage_filter(region)),
                    accept_empty=True,
                ),
                Stage("backup-storage-fallback", lambda: [make_fallback_item(region, normalized)]),
            ]
        )

    def get_ltr_backup_storage_pricing(self, region: str) -> list[PriceItem]:
        """Return long-term-retention prices for *region*.

        Falls back to :meth:`get_sql_backup_storage_pricing` when the LTR
        query fails or matches nothing.
        """
        return run_cascade(
            [
                Stage("ltr", lambda: self.client.fetch(build_ltr_filter(region))),
                Stage(
                    "ltr-backup-storage",
                    lambda: self.get_sql_backup_storage_pricing(region),
                    accept_empty=True,
                ),
            ]
        )

    def get_best_ltr_price(self, region: str) -> float:
        """Return the single LTR price to quote for *region*, preferring LRS."""
        return select_best_ltr_price(self.get_ltr_backup_storage_pricing(region))

    def get_azure_backup_prices(
        self,
        service: str,
        meter_suffix: str,
        region: str | None = None,
    ) -> list[PriceItem]:
        """Return Standard ``Backup`` prices for any service and meter suffix.

        No fallback: upstream errors propagate to the caller.
        """
        return self.client.fetch(build_generic_backup_filter(service, meter_suffix, region))

    def get_available_regions(self) -> list[str]:
        """Return the sorted ARM regions that offer SQL Database.

        When the API cannot be reached, ``FALLBACK_REGIONS`` is returned.
        """
        return run_cascade(
            [
                Stage(
                    "region-discovery",
                    lambda: aggregate_regions(self.client.fetch(build_region_discovery_filter())),
                    accept_empty=True,
                ),
                Stage("region-discovery-fallback", lambda: list(FALLBACK_REGIONS)),
            ]
        )


@lru_cache(maxsize=1)
def get_resolver() -> PricingResolver:
    """Return the process-wide resolver built from :data:`settings`."""
    logger.debug("Creating pricing resolver for %s", settings.retail_prices_url)
    return PricingResolver.from_settings(settings)
