"""Forecast entry models: the current reading, day/night forecasts and warnings."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias, cast


class TemperatureKind(StrEnum):
    HIGH = "High"
    LOW = "Low"
    CURRENT = "Current"


class DayOfWeek(StrEnum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class EntryKind(StrEnum):
    CURRENT = "Current"
    FUTURE = "Future"
    WARNING = "Warning"


@dataclass(frozen=True)
class Temperature:
    kind: TemperatureKind
    value: float  # raw degrees; kind is metadata only


@dataclass(frozen=True)
class DayNight:
    celsius: Temperature
    fahrenheit: Temperature
    day_of_week: DayOfWeek
    description: str
    summary: str


@dataclass(frozen=True)
class CurrentEntry:
    summary: str
    celsius: Temperature
    fahrenheit: Temperature
    description: str


@dataclass(frozen=True)
class FutureEntry:
    day: DayNight | None = None
    night: DayNight | None = None

    def __post_init__(self) -> None:
        if self.day is None and self.night is None:
            raise ValueError("FutureEntry needs a day or a night forecast")

    @property
    def day_of_week(self) -> DayOfWeek:
        """Weekday of the entry; both halves share it when both are present."""
        half = self.day if self.day is not None else self.night
        return cast(DayNight, half).day_of_week


@dataclass(frozen=True)
class WarningEntry:
    title: str
    summary: str


ForecastEntry: TypeAlias = CurrentEntry | FutureEntry | WarningEntry
