"""Azure Retail Prices API client – one filtered GET, first page only."""

from __future__ import annotations

import logging
import time
from urllib.parse import urlparse

import requests
from pydantic import ValidationError

from az_backup_pricing.errors import (
    InvalidUrlError,
    UpstreamDecodeError,
    UpstreamHttpError,
    UpstreamRequestError,
)
from az_backup_pricing.models import PriceItem, RetailPricesPage

logger = logging.getLogger(__name__)


class RetailPricesClient:
    """Issue ``$filter`` queries against the Retail Prices endpoint.

    The underlying :class:`requests.Session` is created once and reused by
    every call.  The API is unauthenticated.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
    ) -> None:
        self.base_url = base_url
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.max_retries = max(1, max_retries)

    def fetch(self, odata_filter: str) -> list[PriceItem]:
        """Return the ``Items`` of the first page matching *odata_filter*.

        Raises :class:`InvalidUrlError` when the endpoint is not an HTTP(S)
        URL, :class:`UpstreamRequestError` when no response was received,
        :class:`UpstreamHttpError` on a non-2xx status and
        :class:`UpstreamDecodeError` when the body is not a valid page.
        """
        self._check_url()
        resp = self._get({"$filter": odata_filter})

        if not 200 <= resp.status_code < 300:
            raise UpstreamHttpError(resp.status_code, resp.reason or "")

        try:
            page = RetailPricesPage.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise UpstreamDecodeError(f"Malformed Retail Prices response: {exc}") from exc

        if page.next_page_link:
            logger.debug(
                "Ignoring NextPageLink, keeping first %d of Count=%d items",
                len(page.items),
                page.count,
            )
        return page.items

    def _check_url(self) -> None:
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidUrlError(f"Invalid Retail Prices URL: {self.base_url!r}")

    def _retry_delay(self, resp: requests.Response, attempt: int) -> float:
        """Seconds to wait before retrying, never negative nor above the timeout."""
        try:
            retry_after = float(resp.headers.get("Retry-After", str(2**attempt)))
        except (TypeError, ValueError):
            retry_after = 2**attempt
        return max(0.0, min(retry_after, self.timeout))

    def _get(self, params: dict[str, str]) -> requests.Response:
        """GET with bounded retries on HTTP 429."""
        logger.info("Fetching pricing from %s with $filter=%s", self.base_url, params["$filter"])
        attempt = 0
        while True:
            try:
                resp = self.session.get(self.base_url, params=params, timeout=self.timeout)
            except requests.RequestException as exc:
                raise UpstreamRequestError(f"Retail Prices request failed: {exc}") from exc
            attempt += 1
            if resp.status_code != 429 or attempt >= self.max_retries:
                return resp
            retry_after = self._retry_delay(resp, attempt - 1)
            logger.warning(
                "Retail Prices 429, retrying in %ss (attempt %s/%s)",
                retry_after,
                attempt,
                self.max_retries,
            )
            time.sleep(retry_after)
