"""Parking page client: lowest level, sends the GET only. No parsing."""
import logging

import httpx

from parkwatch.core.errors import FetchError
from parkwatch.services.parking.config import ParkingConfig

logger = logging.getLogger(__name__)


class ParkingClient:
    """Fetches the raw streamed body of the parking status page."""

    def __init__(self, config: ParkingConfig | None = None, *, transport: httpx.BaseTransport | None = None) -> None:
        self._config = config or ParkingConfig()
        self._transport = transport

    @property
    def config(self) -> ParkingConfig:
        return self._config

    def fetch_text(self) -> str:
        """GET the page. Raises FetchError on non-2xx (status_code set) or network failure (cause set)."""
        url = self._config.url
        try:
            with httpx.Client(
                timeout=self._config.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as c:
                r = c.get(url, headers=self._config.headers())
        except httpx.HTTPError as e:
            raise FetchError(f"Parking fetch failed: {e}", cause=e) from e
        if not r.is_success:
            raise FetchError(f"Parking page error: {r.status_code}", status_code=r.status_code)
        logger.debug("Fetched %s (%s bytes)", url, len(r.content))
        return r.text
