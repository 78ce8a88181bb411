"""Tests for the forecast reducer."""

from datetime import UTC, datetime, timedelta

import pytest

from weatherdesk.state.actions import FetchFailed, FetchSucceeded, RequestFetch
from weatherdesk.state.reducer import (
    INITIAL_STATE,
    ForecastState,
    Phase,
    reduce,
    replay,
)

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def failed_state(warning_entry) -> ForecastState:
    return ForecastState(
        entries=(warning_entry,),
        fetching=False,
        error="boom",
        last_refreshed=T0,
    )


class TestInitialState:
    def test_defaults(self):
        assert INITIAL_STATE.entries == ()
        assert INITIAL_STATE.fetching is False
        assert INITIAL_STATE.error is None
        assert INITIAL_STATE.last_refreshed is None
        assert INITIAL_STATE.phase == Phase.IDLE


class TestRequestFetch:
    def test_sets_fetching(self):
        state = reduce(INITIAL_STATE, RequestFetch())
        assert state.fetching is True
        assert state.error is None
        assert state.phase == Phase.LOADING

    def test_clears_error_from_failed(self, failed_state):
        state = reduce(failed_state, RequestFetch())
        assert state.fetching is True
        assert state.error is None
        assert state.entries == failed_state.entries

    def test_when_already_fetching(self):
        once = reduce(INITIAL_STATE, RequestFetch())
        assert reduce(once, RequestFetch()) == once


class TestFetchFailed:
    def test_sets_error_keeps_entries(self, failed_state):
        loading = reduce(failed_state, RequestFetch())
        state = reduce(loading, FetchFailed("network down"))
        assert state.fetching is False
        assert state.error == "network down"
        assert state.entries == failed_state.entries
        assert state.phase == Phase.FAILED

    def test_without_prior_request(self):
        state = reduce(INITIAL_STATE, FetchFailed("oops"))
        assert state.error == "oops"
        assert state.fetching is False


class TestFetchSucceeded:
    def test_replaces_entries(self, sample_entries):
        state = reduce(INITIAL_STATE, FetchSucceeded(sample_entries, received_at=T0))
        assert state.entries == tuple(sample_entries)
        assert state.fetching is False
        assert state.error is None
        assert state.last_refreshed == T0
        assert state.phase == Phase.LOADED

    def test_clears_error(self, failed_state, current_entry):
        state = reduce(failed_state, FetchSucceeded([current_entry], received_at=T0 + timedelta(1)))
        assert state.error is None
        assert state.entries == (current_entry,)

    def test_last_refreshed_strictly_increases(self, failed_state):
        stale = FetchSucceeded([], received_at=T0 - timedelta(hours=1))
        state = reduce(failed_state, stale)
        assert state.last_refreshed > failed_state.last_refreshed

        same = reduce(state, FetchSucceeded([], received_at=state.last_refreshed))
        assert same.last_refreshed > state.last_refreshed

    def test_list_entries_become_tuple(self, sample_entries):
        action = FetchSucceeded(sample_entries)
        assert isinstance(action.entries, tuple)

    def test_received_at_defaults_to_now(self):
        before = datetime.now(UTC)
        action = FetchSucceeded([])
        assert action.received_at >= before


class TestPurity:
    @pytest.mark.parametrize(
        "action",
        [
            RequestFetch(),
            FetchFailed("network down"),
            FetchSucceeded([], received_at=T0 + timedelta(minutes=5)),
        ],
    )
    def test_same_input_same_output(self, failed_state, action):
        assert reduce(failed_state, action) == reduce(failed_state, action)

    def test_does_not_mutate_input(self, failed_state):
        snapshot = ForecastState(**failed_state.__dict__)
        reduce(failed_state, RequestFetch())
        assert failed_state == snapshot


class TestScenarios:
    def test_request_then_success(self, current_entry):
        state = replay([RequestFetch(), FetchSucceeded([current_entry], received_at=T0)])
        assert state.fetching is False
        assert state.entries == (current_entry,)
        assert state.error is None

    def test_request_then_failure(self, sample_entries):
        loaded = replay([FetchSucceeded(sample_entries, received_at=T0)])
        state = replay([RequestFetch(), FetchFailed("network down")], loaded)
        assert state.fetching is False
        assert state.error == "network down"
        assert state.entries == loaded.entries

    def test_unsolicited_push(self, sample_entries):
        from weatherdesk.models.forecast import WarningEntry

        loaded = replay([FetchSucceeded(sample_entries, received_at=T0)])
        frost = WarningEntry("Frost Advisory", "...")
        state = reduce(loaded, FetchSucceeded([frost], received_at=T0 + timedelta(minutes=15)))
        assert state.entries == (frost,)
        assert state.error is None
        assert state.last_refreshed > loaded.last_refreshed
