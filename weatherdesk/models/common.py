"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class TemperatureUnit(StrEnum):
    CELSIUS = "Celsius"
    FAHRENHEIT = "Fahrenheit"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
