"""Pydantic models for Retail Prices records and API envelopes.

Field aliases follow the camelCase names used by the Azure Retail Prices
API so that records round-trip to callers exactly as received.
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Upstream records
# ---------------------------------------------------------------------------


class PriceItem(BaseModel):
    """One price record from the Retail Prices API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    currency_code: str = Field(alias="currencyCode")
    tier_minimum_units: float = Field(alias="tierMinimumUnits")
    retail_price: float = Field(alias="retailPrice", ge=0)
    unit_price: float = Field(alias="unitPrice")
    arm_region_name: str = Field(alias="armRegionName")
    location: str
    effective_start_date: str = Field(alias="effectiveStartDate")
    meter_id: str = Field(alias="meterId")
    meter_name: str = Field(alias="meterName")
    product_id: str = Field(alias="productId")
    sku_id: str = Field(alias="skuId")
    product_name: str = Field(alias="productName")
    sku_name: str = Field(alias="skuName")
    service_name: str = Field(alias="serviceName")
    service_id: str = Field(alias="serviceId")
    service_family: str = Field(alias="serviceFamily")
    unit_of_measure: str = Field(alias="unitOfMeasure")
    price_type: str = Field(alias="type")

    def to_api(self) -> dict:
        """Serialize with the upstream camelCase field names."""
        return self.model_dump(by_alias=True)


class RetailPricesPage(BaseModel):
    """A single page of the Retail Prices API response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    billing_currency: str | None = Field(None, alias="BillingCurrency")
    customer_entity_id: str | None = Field(None, alias="CustomerEntityId")
    customer_entity_type: str | None = Field(None, alias="CustomerEntityType")
    items: list[PriceItem] = Field(alias="Items")
    next_page_link: str | None = Field(None, alias="NextPageLink")
    count: int = Field(0, alias="Count")


# ---------------------------------------------------------------------------
# Caller-facing payloads
# ---------------------------------------------------------------------------


class BestPrice(BaseModel):
    price: float
    currency: str
    region: str


class RegionList(BaseModel):
    regions: list[str]


class ApiResponse(BaseModel, Generic[T]):
    """Uniform ``{success, data, error}`` envelope for every operation."""

    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data, error=None)

    @classmethod
    def fail(cls, message: str) -> "ApiResponse[T]":
        return cls(success=False, data=None, error=message)


# ---------------------------------------------------------------------------
# Retention cost planning
# ---------------------------------------------------------------------------

TimelineInterval = Literal["weekly", "monthly", "quarterly", "yearly"]


class RetentionSettings(BaseModel):
    """Number of weekly, monthly and yearly LTR backups kept."""

    weekly: int = Field(0, ge=0)
    monthly: int = Field(0, ge=0)
    yearly: int = Field(0, ge=0)

    @property
    def has_backups(self) -> bool:
        return self.weekly > 0 or self.monthly > 0 or self.yearly > 0


class CostParameters(BaseModel):
    dbSize: float = Field(ge=0, description="Database size in GB.")
    growthRate: float = Field(0.0, description="Annual growth rate in percent.")
    retention: RetentionSettings
    storagePrice: float = Field(ge=0, description="Price per GB/month.")


class CostBreakdown(BaseModel):
    weeklyBackupCost: float
    monthlyBackupCost: float
    yearlyBackupCost: float
    totalMonthlyCost: float
    totalYearlyCost: float


class TimelineCosts(BaseModel):
    weekly: float
    monthly: float
    yearly: float
    total: float


class TimelineSeries(BaseModel):
    label: str
    data: list[float]


class Timeline(BaseModel):
    labels: list[str]
    datasets: list[TimelineSeries]


class RetentionPlanRequest(BaseModel):
    """Database profile to price.  ``storagePrice`` overrides the LTR lookup."""

    region: str
    dbSize: float = Field(ge=0)
    growthRate: float = 0.0
    retention: RetentionSettings = Field(default_factory=RetentionSettings)
    storagePrice: float | None = Field(None, ge=0)
    timelineYears: float = Field(1.0, gt=0, le=50)
    xAxisInterval: TimelineInterval = "monthly"


class RetentionPlan(BaseModel):
    region: str
    currency: str
    storagePrice: float
    breakdown: CostBreakdown
    timeline: Timeline
