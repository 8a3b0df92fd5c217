"""OData ``$filter`` expressions for the Azure Retail Prices API.

All region values pass through :func:`normalize_region` here, so every
query path sends the same exact-match token for a given region.
"""

from __future__ import annotations

from az_backup_pricing.config import SQL_DATABASE_SERVICE


def normalize_region(region: str) -> str:
    """Return the ARM form of *region*: lowercase with all whitespace removed.

    ``"East US 2"`` becomes ``"eastus2"``.  Any string is accepted, including
    the empty string.
    """
    return "".join(region.lower().split())


def _quote(value: str) -> str:
    """Quote *value* as an OData string literal."""
    return "'" + value.replace("'", "''") + "'"


def _eq(field: str, value: str) -> str:
    return f"{field} eq {_quote(value)}"


def _contains(field: str, value: str) -> str:
    return f"contains({field}, {_quote(value)})"


def _endswith(field: str, value: str) -> str:
    return f"endswith({field},{_quote(value)})"


def _and(clauses: list[str]) -> str:
    return " and ".join(clauses)


def build_backup_storage_filter(region: str) -> str:
    """Filter for standard SQL Database backup storage meters in *region*."""
    return _and(
        [
            _eq("serviceName", SQL_DATABASE_SERVICE),
            _eq("armRegionName", normalize_region(region)),
            _contains("meterName", "Backup Storage"),
        ]
    )


def build_ltr_filter(region: str) -> str:
    """Filter for SQL Database long-term-retention meters in *region*."""
    ltr_meter = " or ".join(
        [_contains("meterName", "LTR"), _contains("meterName", "Long Term Retention")]
    )
    return _and(
        [
            _eq("serviceName", SQL_DATABASE_SERVICE),
            _eq("armRegionName", normalize_region(region)),
            f"({ltr_meter})",
        ]
    )


def build_generic_backup_filter(
    service: str,
    meter_suffix: str,
    region: str | None = None,
) -> str:
    """Filter for Standard consumption ``Backup`` meters of any *service*.

    The region clause is only added when *region* is given.
    """
    clauses = [
        _eq("serviceName", service),
        _endswith("meterName", meter_suffix),
        _eq("productName", "Backup"),
        _eq("type", "Consumption"),
        _eq("skuName", "Standard"),
    ]
    if region is not None:
        clauses.append(_eq("armRegionName", normalize_region(region)))
    return _and(clauses)


def build_region_discovery_filter() -> str:
    """Filter matching every SQL Database record, used to enumerate regions."""
    return _eq("serviceName", SQL_DATABASE_SERVICE)
