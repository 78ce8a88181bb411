"""HTTP gateway for the weatherdesk backend service."""

import logging

import httpx

from weatherdesk.gateway.base import RefreshHandler, Unsubscribe
from weatherdesk.gateway.refresh_poller import DEFAULT_INTERVAL, subscribe_polling
from weatherdesk.models.codec import decode_entries
from weatherdesk.models.forecast import ForecastEntry

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8777"
DEFAULT_USER_AGENT = "weatherdesk/0.1.0"
WEATHER_ENDPOINT = "/api/weather"


class HttpForecastGateway:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        refresh_interval: float = DEFAULT_INTERVAL,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.refresh_interval = refresh_interval

    def fetch_forecast(self) -> list[ForecastEntry]:
        """Fetch the forecast list from the backend.

        Accepts the ``{"forecasts": [...], "fetched": ...}`` envelope or a
        bare list. No retries: a failed fetch is re-attempted by the user.
        """
        url = f"{self.base_url}{WEATHER_ENDPOINT}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            resp = httpx.get(url, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Backend returned %d for %s", e.response.status_code, url)
            raise
        except httpx.RequestError as e:
            logger.error("Backend request failed for %s: %s", url, e)
            raise

        entries = decode_entries(resp.json())
        logger.info("Fetched %d forecast entries from %s", len(entries), url)
        return entries

    def subscribe_refresh(self, handler: RefreshHandler) -> Unsubscribe:
        return subscribe_polling(self.fetch_forecast, handler, self.refresh_interval)
