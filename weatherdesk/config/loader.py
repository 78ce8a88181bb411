"""YAML config loader and gateway construction."""

from pathlib import Path
from typing import Any

import yaml

from weatherdesk.config.schema import AppConfig, GatewayMode
from weatherdesk.gateway.feed_gateway import FeedForecastGateway
from weatherdesk.gateway.http_gateway import HttpForecastGateway


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    With no path, or an empty file, every section takes its defaults.
    """
    if path is None:
        return AppConfig()

    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    return AppConfig(**raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'gateway.feed_url'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def build_gateway(config: AppConfig) -> FeedForecastGateway | HttpForecastGateway:
    gw = config.gateway
    if gw.mode == GatewayMode.HTTP:
        return HttpForecastGateway(
            base_url=gw.base_url,
            timeout=gw.timeout_seconds,
            refresh_interval=gw.refresh_interval_minutes * 60,
        )
    return build_feed_gateway(config)


def build_feed_gateway(config: AppConfig) -> FeedForecastGateway:
    """Feed gateway regardless of mode; the backend always reads the feed itself."""
    gw = config.gateway
    return FeedForecastGateway(
        feed_url=gw.feed_url,
        timeout=gw.timeout_seconds,
        refresh_interval=gw.refresh_interval_minutes * 60,
    )
