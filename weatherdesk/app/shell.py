"""Forecast session: wires the reducer to the backend gateway.

Two producers feed the session: fetch completions (from the executor thread)
and pushed refreshes (from the gateway's subscription). Neither touches the
state; both post actions onto a queue that the owning thread drains with
``pump()``. The last applied action wins, so a slow manual fetch may still
overwrite a newer push.
"""

import logging
import queue
import threading
import time
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor

from weatherdesk.gateway.base import ForecastGateway, Unsubscribe
from weatherdesk.models.common import TemperatureUnit
from weatherdesk.models.forecast import ForecastEntry
from weatherdesk.render.dispatcher import PresentationNode, render_all
from weatherdesk.state.actions import Action, FetchFailed, FetchSucceeded, RequestFetch
from weatherdesk.state.reducer import INITIAL_STATE, ForecastState, reduce

logger = logging.getLogger(__name__)


class ForecastSession:
    def __init__(
        self,
        gateway: ForecastGateway,
        unit: TemperatureUnit = TemperatureUnit.CELSIUS,
        executor: Executor | None = None,
        on_change: Callable[[ForecastState], None] | None = None,
    ):
        self.gateway = gateway
        self.unit = unit
        self.on_change = on_change
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="forecast-fetch"
        )
        self._inbox: queue.Queue[Action] = queue.Queue()
        self._lock = threading.Lock()
        self._state = INITIAL_STATE
        self._unsubscribe: Unsubscribe | None = None
        self._started = False
        self._closed = False

    @property
    def state(self) -> ForecastState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "ForecastSession":
        try:
            self.start()
        except Exception:
            self.close()
            raise
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def start(self) -> None:
        """Open the push subscription and issue the initial fetch."""
        if self._started:
            return
        self._started = True
        try:
            self._unsubscribe = self.gateway.subscribe_refresh(self._on_push)
        except Exception:
            logger.warning(
                "Refresh subscription unavailable, continuing without pushes",
                exc_info=True,
            )
        self._request_fetch()

    def refresh(self) -> bool:
        """Manual refresh. Returns False (and does nothing) while a fetch is in flight."""
        if self._closed:
            return False
        self.pump()
        if not self._state.can_refresh:
            logger.debug("Refresh ignored, fetch already in flight")
            return False
        self._request_fetch()
        return True

    def close(self) -> None:
        """Release the subscription. A pending fetch is not aborted; its result is dropped."""
        if self._closed:
            return
        self._closed = True
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        try:
            if unsubscribe is not None:
                unsubscribe()
        finally:
            if self._owns_executor:
                self._executor.shutdown(wait=False)
            logger.info("Forecast session closed")

    def post(self, action: Action) -> None:
        """Queue an action for the owning thread. Safe from any thread."""
        if self._closed:
            logger.debug("Session closed, dropping %s", type(action).__name__)
            return
        self._inbox.put(action)

    def pump(self, wait: float = 0.0) -> int:
        """Apply queued actions in arrival order.

        Waits up to ``wait`` seconds for the first action, then drains
        whatever else is queued. Returns the number of actions applied.
        """
        applied = 0
        try:
            action = self._inbox.get(timeout=wait) if wait > 0 else self._inbox.get_nowait()
        except queue.Empty:
            return 0
        while True:
            if self._closed:
                return applied
            self._apply(action)
            applied += 1
            try:
                action = self._inbox.get_nowait()
            except queue.Empty:
                return applied

    def wait_until_settled(self, timeout: float = 60.0) -> bool:
        """Pump until no fetch is in flight. Returns False on timeout."""
        deadline = time.monotonic() + timeout
        while self._state.fetching and not self._closed:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            self.pump(wait=min(remaining, 0.1))
        return not self._state.fetching

    def nodes(self) -> list[PresentationNode]:
        return render_all(self._state.entries, self.unit)

    def _request_fetch(self) -> None:
        self._apply(RequestFetch())
        self._executor.submit(self._fetch)

    def _fetch(self) -> None:
        try:
            entries = self.gateway.fetch_forecast()
        except Exception as e:
            logger.exception("Forecast fetch failed")
            self.post(FetchFailed(str(e) or type(e).__name__))
            return
        self.post(FetchSucceeded(entries))

    def _on_push(self, entries: list[ForecastEntry]) -> None:
        logger.info("Received pushed forecast (%d entries)", len(entries))
        self.post(FetchSucceeded(entries))

    def _apply(self, action: Action) -> None:
        with self._lock:
            previous = self._state
            self._state = reduce(previous, action)
            current = self._state
        logger.debug("Applied %s -> %s", type(action).__name__, current.phase)
        if self.on_change is not None and current != previous:
            self.on_change(current)
