"""Tests for the az-backup-pricing FastAPI routes."""

from unittest.mock import patch

import pytest
import requests
from conftest import mock_response, page, price_record
from fastapi.testclient import TestClient

from az_backup_pricing.app import app
from az_backup_pricing.config import FALLBACK_REGIONS, settings
from az_backup_pricing.pricing import get_resolver

# ---------------------------------------------------------------------------
# GET /health
# ---------------------------------------------------------------------------


class TestHealth:
    """Tests for the health endpoint."""

    def test_returns_envelope(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "data": "Azure Pricing API is healthy",
            "error": None,
        }


# ---------------------------------------------------------------------------
# GET /api/pricing/sql-backup/{region}
# ---------------------------------------------------------------------------


class TestSqlBackupPricing:
    """Tests for the /api/pricing/sql-backup endpoint."""

    def test_returns_items_with_upstream_field_names(self, client, session):
        session.get.return_value = mock_response(page([price_record(retailPrice=0.12)]))

        resp = client.get("/api/pricing/sql-backup/eastus")

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["error"] is None
        assert body["data"][0]["retailPrice"] == 0.12
        assert body["data"][0]["armRegionName"] == "eastus"
        assert body["data"][0]["type"] == "Consumption"

    def test_fallback_when_upstream_down(self, client, session):
        session.get.side_effect = requests.ConnectionError("down")

        resp = client.get("/api/pricing/sql-backup/West%20Europe")

        assert resp.status_code == 200
        (item,) = resp.json()["data"]
        assert item["meterId"] == "fallback"
        assert item["retailPrice"] == 0.05
        assert item["location"] == "West Europe"
        assert item["armRegionName"] == "westeurope"


# ---------------------------------------------------------------------------
# GET /api/pricing/ltr-backup/{region}
# ---------------------------------------------------------------------------


class TestLtrBackupPricing:
    """Tests for the /api/pricing/ltr-backup endpoint."""

    def test_returns_ltr_items(self, client, session):
        session.get.return_value = mock_response(
            page([price_record(meterName="LTR Backup Storage LRS")])
        )

        resp = client.get("/api/pricing/ltr-backup/eastus")

        assert resp.status_code == 200
        assert resp.json()["data"][0]["meterName"] == "LTR Backup Storage LRS"

    def test_falls_back_to_backup_storage(self, client, session):
        session.get.side_effect = [
            mock_response(page([])),
            mock_response(page([price_record(meterName="Backup Storage RA-GRS")])),
        ]

        resp = client.get("/api/pricing/ltr-backup/eastus")

        assert resp.json()["data"][0]["meterName"] == "Backup Storage RA-GRS"


# ---------------------------------------------------------------------------
# GET /api/pricing/best-ltr/{region}
# ---------------------------------------------------------------------------


class TestBestLtrPricing:
    """Tests for the /api/pricing/best-ltr endpoint."""

    def test_returns_price_currency_region(self, client, session):
        session.get.return_value = mock_response(
            page(
                [
                    price_record(skuName="ZRS", retailPrice=0.1),
                    price_record(skuName="LRS", retailPrice=0.03),
                ]
            )
        )

        resp = client.get("/api/pricing/best-ltr/East US")

        assert resp.status_code == 200
        assert resp.json()["data"] == {"price": 0.03, "currency": "USD", "region": "East US"}

    def test_floor_price(self, client, session):
        session.get.return_value = mock_response(page([]))

        resp = client.get("/api/pricing/best-ltr/eastus")

        assert resp.json()["data"]["price"] == 0.05


# ---------------------------------------------------------------------------
# GET /api/pricing/azure-backup
# ---------------------------------------------------------------------------


class TestAzureBackupPricing:
    """Tests for the /api/pricing/azure-backup endpoint."""

    def test_returns_items(self, client, session):
        session.get.return_value = mock_response(page([price_record(serviceName="Backup")]))

        resp = client.get(
            "/api/pricing/azure-backup",
            params={"service": "Backup", "meter_suffix": "LRS Data Stored", "region": "eastus"},
        )

        assert resp.status_code == 200
        assert resp.json()["data"][0]["serviceName"] == "Backup"
        sent = session.get.call_args.kwargs["params"]["$filter"]
        assert sent.endswith("armRegionName eq 'eastus'")

    def test_region_is_optional(self, client, session):
        session.get.return_value = mock_response(page([]))

        resp = client.get(
            "/api/pricing/azure-backup",
            params={"service": "Backup", "meter_suffix": "LRS Data Stored"},
        )

        assert resp.status_code == 200
        assert "armRegionName" not in session.get.call_args.kwargs["params"]["$filter"]

    def test_upstream_error_returns_500_envelope(self, client, session):
        session.get.return_value = mock_response(status_code=502)

        resp = client.get(
            "/api/pricing/azure-backup",
            params={"service": "Backup", "meter_suffix": "LRS Data Stored"},
        )

        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["data"] is None
        assert body["error"].startswith("Failed to fetch backup pricing:")
        assert "502" in body["error"]

    def test_missing_params_rejected(self, client):
        resp = client.get("/api/pricing/azure-backup", params={"service": "Backup"})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# GET /api/regions
# ---------------------------------------------------------------------------


class TestRegions:
    """Tests for the /api/regions endpoint."""

    def test_returns_sorted_regions(self, client, session):
        records = [price_record(armRegionName=r) for r in ["westus", "eastus", "westus", ""]]
        session.get.return_value = mock_response(page(records))

        resp = client.get("/api/regions")

        assert resp.status_code == 200
        assert resp.json()["data"] == {"regions": ["eastus", "westus"]}

    def test_fallback_regions(self, client, session):
        session.get.return_value = mock_response(status_code=500)

        resp = client.get("/api/regions")

        assert resp.json()["data"]["regions"] == list(FALLBACK_REGIONS)


class TestCors:
    """CORS headers are returned for any origin."""

    def test_allows_any_origin(self, client):
        resp = client.get("/health", headers={"Origin": "https://example.org"})
        assert resp.headers["access-control-allow-origin"] == "*"


class TestMisconfiguredEndpoint:
    """A bad RETAIL_PRICES_URL still yields enveloped answers."""

    @pytest.fixture()
    def bad_url_client(self):
        get_resolver.cache_clear()
        with patch.object(settings, "retail_prices_url", "not a url"), TestClient(app) as c:
            yield c
        get_resolver.cache_clear()

    def test_backup_pricing_returns_fallback(self, bad_url_client):
        resp = bad_url_client.get("/api/pricing/sql-backup/eastus")

        assert resp.status_code == 200
        assert resp.json()["data"][0]["meterId"] == "fallback"

    def test_generic_pricing_returns_error_envelope(self, bad_url_client):
        resp = bad_url_client.get(
            "/api/pricing/azure-backup",
            params={"service": "Backup", "meter_suffix": "LRS Data Stored"},
        )

        assert resp.status_code == 500
        assert resp.json()["success"] is False
        assert "Invalid Retail Prices URL" in resp.json()["error"]


# ---------------------------------------------------------------------------
# POST /api/planner/retention-cost
# ---------------------------------------------------------------------------


class TestRetentionPlanner:
    """Tests for the /api/planner/retention-cost endpoint."""

    def test_prices_with_best_ltr(self, client, session):
        session.get.return_value = mock_response(
            page([price_record(skuName="LRS", retailPrice=0.02)])
        )

        resp = client.post(
            "/api/planner/retention-cost",
            json={
                "region": "East US",
                "dbSize": 100,
                "retention": {"weekly": 4, "monthly": 12, "yearly": 5},
                "timelineYears": 2,
                "xAxisInterval": "quarterly",
            },
        )

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["storagePrice"] == 0.02
        assert data["region"] == "East US"
        assert data["breakdown"]["weeklyBackupCost"] == pytest.approx(100 * 4 * 0.02)
        assert data["timeline"]["labels"][-1] == "Q8"
        assert data["timeline"]["datasets"][0]["label"] == "Total Cost"

    def test_fallback_price_when_upstream_down(self, client, session):
        session.get.side_effect = requests.ConnectionError("down")

        resp = client.post(
            "/api/planner/retention-cost",
            json={"region": "eastus", "dbSize": 10, "retention": {"monthly": 1}},
        )

        assert resp.json()["data"]["storagePrice"] == 0.05

    def test_rejects_negative_retention(self, client):
        resp = client.post(
            "/api/planner/retention-cost",
            json={"region": "eastus", "dbSize": 10, "retention": {"weekly": -1}},
        )
        assert resp.status_code == 422
