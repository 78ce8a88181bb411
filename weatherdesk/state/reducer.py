"""Forecast state and the pure reducer that advances it.

The reducer never inspects the current phase before applying an action: every
action is valid from every state. This lets pushed updates and pulled fetch
results share one path.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import StrEnum
from typing import assert_never

from weatherdesk.models.forecast import ForecastEntry
from weatherdesk.state.actions import Action, FetchFailed, FetchSucceeded, RequestFetch


class Phase(StrEnum):
    IDLE = "Idle"
    LOADING = "Loading"
    LOADED = "Loaded"
    FAILED = "Failed"


@dataclass(frozen=True)
class ForecastState:
    entries: tuple[ForecastEntry, ...] = ()
    fetching: bool = False
    error: str | None = None
    last_refreshed: datetime | None = None

    @property
    def phase(self) -> Phase:
        if self.fetching:
            return Phase.LOADING
        if self.error is not None:
            return Phase.FAILED
        if self.last_refreshed is not None:
            return Phase.LOADED
        return Phase.IDLE

    @property
    def can_refresh(self) -> bool:
        return not self.fetching


INITIAL_STATE = ForecastState()


def reduce(state: ForecastState, action: Action) -> ForecastState:
    """Return the state that results from applying ``action`` to ``state``."""
    if isinstance(action, RequestFetch):
        return replace(state, fetching=True, error=None)
    elif isinstance(action, FetchFailed):
        return replace(state, fetching=False, error=action.message)
    elif isinstance(action, FetchSucceeded):
        return replace(
            state,
            fetching=False,
            entries=action.entries,
            error=None,
            last_refreshed=_advance(state.last_refreshed, action.received_at),
        )
    else:
        assert_never(action)


def _advance(previous: datetime | None, received_at: datetime) -> datetime:
    """Keep last_refreshed strictly increasing even if clocks disagree."""
    if previous is not None and received_at <= previous:
        return previous + timedelta(microseconds=1)
    return received_at


def replay(actions: list[Action], state: ForecastState = INITIAL_STATE) -> ForecastState:
    for action in actions:
        state = reduce(state, action)
    return state
