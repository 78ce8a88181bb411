"""Background poller that pushes refreshed forecasts to a subscriber."""

import logging
import threading
from collections.abc import Callable

from weatherdesk.gateway.base import RefreshHandler, Unsubscribe
from weatherdesk.models.forecast import ForecastEntry

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 15 * 60  # 15 minutes
STOP_JOIN_TIMEOUT = 0.2  # seconds; an in-flight poll is left to finish on its own


class RefreshPoller:
    """Calls ``fetch`` every ``interval`` seconds and hands results to ``handler``.

    Failed polls are logged and skipped; the subscriber simply sees no push
    for that cycle.
    """

    def __init__(
        self,
        fetch: Callable[[], list[ForecastEntry]],
        handler: RefreshHandler,
        interval: float = DEFAULT_INTERVAL,
    ):
        self.fetch = fetch
        self.handler = handler
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._pushes = 0
        self._failures = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._loop, name="forecast-refresh", daemon=True
        )
        self._thread.start()
        logger.info("Refresh poller started (every %.0fs)", self.interval)

    def stop(self) -> None:
        """Stop polling. Safe to call more than once.

        Does not wait out a poll that is already fetching: the thread is a
        daemon and drops its result once the stop flag is set.
        """
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=STOP_JOIN_TIMEOUT)
            if thread.is_alive():
                logger.debug("Refresh poll still in flight, not waiting for it")
        if thread is not None:
            logger.info(
                "Refresh poller stopped: %d pushes, %d failed polls",
                self._pushes, self._failures,
            )
            self._thread = None

    def _loop(self) -> None:
        # wait() returns True as soon as stop() is called
        while not self._stop.wait(self.interval):
            self.poll_once()

    def poll_once(self) -> bool:
        """Run a single poll. Returns True if a push was delivered."""
        try:
            entries = self.fetch()
        except Exception:
            self._failures += 1
            logger.warning("Forecast refresh poll failed", exc_info=True)
            return False

        if self._stop.is_set():
            return False
        try:
            self.handler(entries)
        except Exception:
            logger.exception("Refresh handler raised")
            return False
        self._pushes += 1
        return True


def subscribe_polling(
    fetch: Callable[[], list[ForecastEntry]],
    handler: RefreshHandler,
    interval: float = DEFAULT_INTERVAL,
) -> Unsubscribe:
    poller = RefreshPoller(fetch, handler, interval)
    poller.start()
    return poller.stop
