"""Shared test fixtures for az-backup-pricing tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from az_backup_pricing.app import app
from az_backup_pricing.pricing import PricingResolver, RetailPricesClient, get_resolver

BASE_URL = "https://prices.example.test/api/retail/prices"


def price_record(**overrides) -> dict:
    """Return one Retail Prices API record as received on the wire."""
    record = {
        "currencyCode": "USD",
        "tierMinimumUnits": 0.0,
        "retailPrice": 0.1,
        "unitPrice": 0.1,
        "armRegionName": "eastus",
        "location": "US East",
        "effectiveStartDate": "2024-01-01T00:00:00Z",
        "meterId": "meter-1",
        "meterName": "Backup Storage ZRS",
        "productId": "DZH318Z0BQ4F",
        "skuId": "DZH318Z0BQ4F/0001",
        "productName": "SQL Database Single/Elastic Pool General Purpose - Storage",
        "skuName": "General Purpose",
        "serviceName": "SQL Database",
        "serviceId": "DZH3180H4HT4",
        "serviceFamily": "Databases",
        "unitOfMeasure": "1 GB/Month",
        "type": "Consumption",
        "isPrimaryMeterRegion": True,
    }
    record.update(overrides)
    return record


def page(items: list[dict], next_page_link: str | None = None) -> dict:
    """Wrap *items* in a Retail Prices API page envelope."""
    return {
        "BillingCurrency": "USD",
        "CustomerEntityId": "Default",
        "CustomerEntityType": "Retail",
        "Items": items,
        "NextPageLink": next_page_link,
        "Count": len(items),
    }


def mock_response(payload=None, status_code: int = 200, headers: dict | None = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.reason = "OK" if status_code < 400 else "Error"
    resp.headers = headers or {}
    resp.json.return_value = payload
    return resp


@pytest.fixture()
def session():
    """A ``requests.Session`` stand-in; tests set ``get`` behaviour."""
    return MagicMock(spec=requests.Session)


@pytest.fixture()
def resolver(session) -> PricingResolver:
    return PricingResolver(RetailPricesClient(BASE_URL, session=session))


@pytest.fixture()
def client(resolver):
    """FastAPI test client wired to the mocked resolver."""
    app.dependency_overrides[get_resolver] = lambda: resolver
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
