"""Fetch-lifecycle actions consumed by the forecast reducer."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TypeAlias

from weatherdesk.models.common import utc_now
from weatherdesk.models.forecast import ForecastEntry


@dataclass(frozen=True)
class RequestFetch:
    pass


@dataclass(frozen=True)
class FetchFailed:
    message: str


@dataclass(frozen=True)
class FetchSucceeded:
    entries: tuple[ForecastEntry, ...]
    received_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        # Callers may hand over a list straight from the gateway
        object.__setattr__(self, "entries", tuple(self.entries))


Action: TypeAlias = RequestFetch | FetchFailed | FetchSucceeded
