"""Gateway that reads the Environment Canada city feed directly."""

import logging

import httpx

from weatherdesk.gateway.base import RefreshHandler, Unsubscribe
from weatherdesk.gateway.refresh_poller import DEFAULT_INTERVAL, subscribe_polling
from weatherdesk.ingest.feed_parser import parse_feed
from weatherdesk.ingest.grouping import to_forecast
from weatherdesk.models.forecast import ForecastEntry

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://weather.gc.ca/rss/city/qc-58_e.xml"
DEFAULT_USER_AGENT = "weatherdesk/0.1.0"


class FeedForecastGateway:
    def __init__(
        self,
        feed_url: str = DEFAULT_FEED_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        refresh_interval: float = DEFAULT_INTERVAL,
    ):
        self.feed_url = feed_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.refresh_interval = refresh_interval

    def fetch_feed(self) -> bytes:
        headers = {"User-Agent": self.user_agent, "Accept": "application/atom+xml"}
        try:
            resp = httpx.get(
                self.feed_url, headers=headers, timeout=self.timeout,
                follow_redirects=True,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Weather feed returned %d for %s", e.response.status_code, self.feed_url
            )
            raise
        except httpx.RequestError as e:
            logger.error("Weather feed request failed for %s: %s", self.feed_url, e)
            raise
        return resp.content

    def fetch_forecast(self) -> list[ForecastEntry]:
        entries = to_forecast(parse_feed(self.fetch_feed()))
        logger.info("Parsed %d forecast entries from %s", len(entries), self.feed_url)
        return entries

    def subscribe_refresh(self, handler: RefreshHandler) -> Unsubscribe:
        return subscribe_polling(self.fetch_forecast, handler, self.refresh_interval)
