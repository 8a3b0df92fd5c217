"""Pricing Resolver for Azure SQL Database backup storage.

Re-exports the public names so callers can use
``from az_backup_pricing.pricing import PricingResolver``.
"""

from az_backup_pricing.pricing.cascade import (  # noqa: F401
    Stage,
    is_fallback_item,
    make_fallback_item,
    run_cascade,
)
from az_backup_pricing.pricing.client import RetailPricesClient  # noqa: F401
from az_backup_pricing.pricing.filters import (  # noqa: F401
    build_backup_storage_filter,
    build_generic_backup_filter,
    build_ltr_filter,
    build_region_discovery_filter,
    normalize_region,
)
from az_backup_pricing.pricing.resolver import PricingResolver, get_resolver  # noqa: F401
from az_backup_pricing.pricing.selection import (  # noqa: F401
    aggregate_regions,
    select_best_ltr_price,
)
