"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

from weatherdesk.gateway.feed_gateway import DEFAULT_FEED_URL
from weatherdesk.gateway.http_gateway import DEFAULT_BASE_URL
from weatherdesk.models.common import TemperatureUnit


class GatewayMode(StrEnum):
    FEED = "feed"  # read the weather feed directly
    HTTP = "http"  # talk to a weatherdesk backend


class GatewayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    mode: GatewayMode = GatewayMode.FEED
    base_url: str = DEFAULT_BASE_URL
    feed_url: str = DEFAULT_FEED_URL
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    refresh_interval_minutes: int = Field(default=15, ge=1)


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    unit: TemperatureUnit = TemperatureUnit.CELSIUS


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    gateway: GatewayConfig = GatewayConfig()
    display: DisplayConfig = DisplayConfig()
    server: ServerConfig = ServerConfig()
