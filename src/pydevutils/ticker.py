"""Cancellable repeating timer for the relative time readout."""

from __future__ import annotations

import datetime as _datetime
import logging
import threading
from collections.abc import Callable

from pydevutils._constants import RELATIVE_TIME_REFRESH_SECONDS

logger = logging.getLogger(__name__)


class RelativeTimeTicker:
    """Calls ``callback`` every ``interval`` seconds while running.

    The owner starts the ticker when an instant becomes valid and stops it
    on invalidation or teardown. ``sync`` does both from the current instant.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval: float = RELATIVE_TIME_REFRESH_SECONDS,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._callback = callback
        self._interval = interval
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start ticking. Does nothing if already running."""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="relative-time-ticker",
                daemon=True,
            )
            self._thread.start()
        logger.debug("relative time ticker started (interval=%ss)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        """Cancel the timer and wait for the thread to finish."""
        with self._lock:
            thread = self._thread
            self._thread = None
            self._stop_event.set()
        if thread is None:
            return
        if thread is not threading.current_thread():
            thread.join(timeout)
        logger.debug("relative time ticker stopped")

    def sync(self, instant: _datetime.datetime | None) -> None:
        """Run while ``instant`` is present, stop when it is absent."""
        if instant is None:
            self.stop()
        else:
            self.start()

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("relative time refresh callback failed")

    def __enter__(self) -> RelativeTimeTicker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
