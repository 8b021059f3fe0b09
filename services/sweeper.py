"""Background purge of expired refresh-token records."""
from __future__ import annotations

import logging
import threading
from typing import Optional

from models.session_store import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60 * 60  # hourly


class ExpirySweeper:
    """
    Runs SessionStore.purge_expired() on a fixed interval in a daemon thread.

    Only bounds memory: lookups already expire records lazily, so a late or
    failed pass never changes an accept/reject decision.
    """

    def __init__(self, store: SessionStore, interval: float = DEFAULT_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError("sweep interval must be positive")
        self.store = store
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> int:
        removed = self.store.purge_expired()
        if removed:
            logger.info("Purged %d expired refresh token(s)", removed)
        return removed

    def start(self) -> None:
        with self._lock:
            if self.running:
                return
            # per-run event: a thread that outlived stop() keeps its set one
            self._stop = threading.Event()
            self._thread = threading.Thread(
                target=self._loop, args=(self._stop,), name="session-sweeper", daemon=True
            )
            self._thread.start()
        logger.debug("Session sweeper started (interval=%ss)", self.interval)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        with self._lock:
            thread = self._thread
            self._thread = None
            self._stop.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _loop(self, stop: threading.Event) -> None:
        while not stop.wait(self.interval):
            try:
                self.run_once()
            except Exception:
                # a failed pass leaves the store untouched; try again next tick
                logger.exception("Session sweep failed")
