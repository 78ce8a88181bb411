"""Tests for the refresh poller."""

import threading
import time
from unittest.mock import MagicMock

from weatherdesk.gateway.refresh_poller import RefreshPoller, subscribe_polling


class TestPollOnce:
    def test_delivers_entries(self, sample_entries):
        handler = MagicMock()
        poller = RefreshPoller(lambda: sample_entries, handler, interval=60)

        assert poller.poll_once() is True
        handler.assert_called_once_with(sample_entries)

    def test_fetch_failure_is_skipped(self):
        handler = MagicMock()
        fetch = MagicMock(side_effect=RuntimeError("backend down"))
        poller = RefreshPoller(fetch, handler, interval=60)

        assert poller.poll_once() is False
        handler.assert_not_called()

    def test_handler_error_counted_as_no_push(self):
        handler = MagicMock(side_effect=ValueError("bad"))
        poller = RefreshPoller(lambda: [], handler, interval=60)
        assert poller.poll_once() is False

    def test_no_push_after_stop(self):
        handler = MagicMock()
        poller = RefreshPoller(lambda: [], handler, interval=60)
        poller.stop()
        assert poller.poll_once() is False
        handler.assert_not_called()


class TestThread:
    def test_pushes_on_interval(self, sample_entries):
        received = threading.Event()

        def handler(entries):
            received.set()

        poller = RefreshPoller(lambda: sample_entries, handler, interval=0.01)
        poller.start()
        try:
            assert received.wait(timeout=5)
        finally:
            poller.stop()
        assert not poller.running

    def test_stop_is_prompt_and_idempotent(self):
        poller = RefreshPoller(lambda: [], MagicMock(), interval=3600)
        poller.start()
        assert poller.running
        poller.stop()
        poller.stop()
        assert not poller.running

    def test_subscribe_polling_returns_stop(self):
        handler = MagicMock()
        unsubscribe = subscribe_polling(lambda: [], handler, interval=3600)
        unsubscribe()
        handler.assert_not_called()


class TestStopDuringPoll:
    def test_stop_does_not_wait_for_slow_fetch(self):
        entered = threading.Event()
        release = threading.Event()
        handler = MagicMock()

        def slow_fetch():
            entered.set()
            release.wait(timeout=10)
            return []

        poller = RefreshPoller(slow_fetch, handler, interval=0.01)
        poller.start()
        try:
            assert entered.wait(timeout=5)
            started = time.monotonic()
            poller.stop()
            assert time.monotonic() - started < 0.5
            assert not poller.running
        finally:
            release.set()

        time.sleep(0.05)
        handler.assert_not_called()
