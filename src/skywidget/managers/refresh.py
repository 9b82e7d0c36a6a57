"""
Periodic refresh scheduling.

Runs a callback on a fixed interval in a background thread with explicit
start and stop hooks.
"""

import logging
import threading
from typing import Callable, Optional

from ..utils.errors import error_boundary

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """
    Calls ``callback`` every ``interval`` seconds until stopped.

    The first call happens one interval after start(). Cycles run one at a
    time on the scheduler thread, so a slow cycle delays the next tick
    rather than overlapping it.
    """

    DEFAULT_INTERVAL = 15 * 60.0  # 15 minutes
    STOP_TIMEOUT = 3.0

    def __init__(self, callback: Callable[[], object], interval: float = DEFAULT_INTERVAL):
        """
        Initialize the scheduler.

        Args:
            callback: Zero-argument callable run on every tick
            interval: Seconds between ticks (must be positive)

        Raises:
            ValueError: If interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval}")

        self.callback = callback
        self.interval = float(interval)
        self.ticks = 0

        # One stop event per thread; start() never clears an old thread's event
        self._thread: Optional[threading.Thread] = None
        self._thread_stop: Optional[threading.Event] = None
        self._stopped = threading.Event()
        self._state_lock = threading.Lock()
        self._cycle_lock = threading.Lock()

    @property
    def running(self) -> bool:
        """True while the scheduler thread is alive."""
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        """Start the background refresh thread."""
        with self._state_lock:
            if self._thread is not None and self._thread.is_alive():
                logger.warning("Refresh scheduler already running")
                return

            stop_event = threading.Event()
            self._thread_stop = stop_event
            self._stopped.clear()
            self._thread = threading.Thread(
                target=self._loop, args=(stop_event,), daemon=True, name="RefreshScheduler"
            )
            self._thread.start()

        logger.debug(f"Refresh scheduler started (every {self.interval:.0f}s)")

    def stop(self) -> None:
        """Stop the refresh thread and wait briefly for it to finish."""
        with self._state_lock:
            thread, stop_event = self._thread, self._thread_stop
            self._thread = None
            self._thread_stop = None
            if stop_event is not None:
                stop_event.set()
            self._stopped.set()

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.STOP_TIMEOUT)
            if thread.is_alive():
                logger.warning("Refresh thread still busy after stop; it will exit after this cycle")

        logger.debug("Refresh scheduler stopped")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until stop() is called; returns True if it was."""
        return self._stopped.wait(timeout)

    def _loop(self, stop_event: threading.Event) -> None:
        """Main scheduling loop (runs in background thread)."""
        while not stop_event.wait(self.interval):
            self._tick(stop_event)

    @error_boundary()
    def _tick(self, stop_event: threading.Event) -> None:
        # Cycles never overlap, even across a restart after a join timeout
        with self._cycle_lock:
            if stop_event.is_set():
                return
            self.ticks += 1
            logger.debug(f"Refresh tick {self.ticks}")
            self.callback()
