"""Errors raised while talking to the Azure Retail Prices API."""


class PricingError(Exception):
    """Base class for every Retail Prices failure."""


class InvalidUrlError(PricingError):
    """The configured Retail Prices endpoint is not a usable HTTP(S) URL."""


class UpstreamRequestError(PricingError):
    """The request never produced a response (connection error, timeout)."""


class UpstreamHttpError(PricingError):
    """The Retail Prices API answered with a non-success status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        detail = f"HTTP error! status: {status_code}"
        if reason:
            detail = f"{detail} {reason}"
        super().__init__(detail)


class UpstreamDecodeError(PricingError):
    """The response body is not a valid Retail Prices page."""
