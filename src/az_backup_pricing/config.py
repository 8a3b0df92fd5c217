"""Settings loaded from environment variables, and fixed pricing constants."""

from pydantic_settings import BaseSettings, SettingsConfigDict

RETAIL_PRICES_URL = "https://prices.azure.com/api/retail/prices"

SQL_DATABASE_SERVICE = "SQL Database"
BEST_PRICE_CURRENCY = "USD"

# Synthetic data returned when the Retail Prices API cannot be reached.
FALLBACK_PRICE = 0.05
FALLBACK_CURRENCY = "USD"
FALLBACK_ID = "fallback"
FALLBACK_METER_NAME = "Backup Storage LRS"
FALLBACK_REGIONS: tuple[str, ...] = (
    "eastus",
    "westus",
    "westus2",
    "eastus2",
    "centralus",
    "northeurope",
    "westeurope",
    "eastasia",
    "southeastasia",
)


class PricingSettings(BaseSettings):
    """Configuration for the pricing service.

    Values are read from environment variables (case-insensitive) and
    optionally from a ``.env`` file in the working directory.
    """

    retail_prices_url: str = RETAIL_PRICES_URL
    request_timeout: float = 30.0
    max_retries: int = 3

    host: str = "0.0.0.0"
    port: int = 8080
    cors_allow_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = PricingSettings()
