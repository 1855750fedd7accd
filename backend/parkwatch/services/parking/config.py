"""Upstream parking page config: URL, fixed request headers and timeout (from Settings)."""
from parkwatch.config import settings


class ParkingConfig:
    """Endpoint and header set for the parking status page."""

    __slots__ = ("url", "referer", "next_url", "locale", "user_agent", "timeout")

    def __init__(
        self,
        *,
        url: str | None = None,
        referer: str | None = None,
        next_url: str | None = None,
        locale: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.url = (url or settings.parking_url).strip()
        self.referer = (referer or settings.parking_referer).strip()
        self.next_url = next_url or settings.parking_next_url
        self.locale = locale or settings.parking_locale
        self.user_agent = user_agent or settings.parking_user_agent
        self.timeout = timeout if timeout is not None else settings.fetch_timeout_seconds

    def headers(self) -> dict[str, str]:
        # rsc: 1 asks the page for its streamed component payload instead of HTML
        return {
            "accept": "*/*",
            "accept-language": "en-US,en;q=0.5",
            "next-url": self.next_url,
            "referer": self.referer,
            "rsc": "1",
            "user-agent": self.user_agent,
            "Cookie": f"NEXT_LOCALE={self.locale}",
        }
