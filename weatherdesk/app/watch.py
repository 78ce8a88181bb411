"""Long-running terminal view of the forecast session.

Usage:
    weatherdesk watch
    weatherdesk watch --unit Fahrenheit
    kill -USR1 <pid>    # refresh now
"""

import logging
import signal
import sys
from typing import TextIO

from weatherdesk.app.shell import ForecastSession
from weatherdesk.render.formatters import format_forecast_text
from weatherdesk.state.reducer import ForecastState

logger = logging.getLogger(__name__)

PUMP_SLICE = 1.0  # seconds between checks of the running flag


class WatchLoop:
    """Pumps a forecast session and redraws on every state change until signalled."""

    def __init__(
        self,
        session: ForecastSession,
        out: TextIO = sys.stdout,
        verbose: bool = False,
    ):
        self.session = session
        self.out = out
        self.verbose = verbose
        self._running = False
        self._refresh_requested = False
        self._redraws = 0
        self.session.on_change = self._redraw

    def start(self) -> None:
        self._setup_signals()
        self._running = True
        logger.info("Watch started (unit=%s), send SIGUSR1 to refresh", self.session.unit)

        try:
            with self.session:
                self._loop()
        except KeyboardInterrupt:
            logger.info("Watch interrupted by keyboard")
        finally:
            self._running = False
            logger.info("Watch stopped after %d redraws", self._redraws)

    def stop(self) -> None:
        self._running = False

    def request_refresh(self) -> None:
        """Ask for a manual refresh; applied on the loop's thread at the next slice."""
        self._refresh_requested = True

    def _loop(self) -> None:
        # Short slices so we notice stop() and refresh requests promptly
        while self._running:
            self._tick()

    def _tick(self, wait: float = PUMP_SLICE) -> None:
        if self._refresh_requested:
            self._refresh_requested = False
            if self.session.refresh():
                logger.info("Manual refresh requested")
            else:
                logger.info("Refresh ignored, forecast fetch still in flight")
        self.session.pump(wait=wait)

    def _redraw(self, state: ForecastState) -> None:
        self._redraws += 1
        text = format_forecast_text(state, self.session.nodes(), self.verbose)
        self.out.write(f"\n{text}\n")
        self.out.flush()

    def _setup_signals(self) -> None:
        """Handle SIGTERM and SIGINT for graceful shutdown, SIGUSR1 for refresh."""
        def _stop(signum: int, frame: object) -> None:
            sig_name = signal.Signals(signum).name
            logger.info("Received %s, shutting down gracefully...", sig_name)
            self._running = False

        def _refresh(signum: int, frame: object) -> None:
            self.request_refresh()

        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)
        # not available on Windows
        if hasattr(signal, "SIGUSR1"):
            signal.signal(signal.SIGUSR1, _refresh)
