"""TTL cache for match search results.

Entries are keyed by (actor id, role, limit) and expire ``ttl_seconds`` after
they are stored. Expiry is pure TTL: reads never extend an entry. A
background worker sweeps expired entries every ``sweep_interval_seconds``
between ``start()`` and ``stop()``.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, NamedTuple

from src.venture_matching.models import MatchResult, Role

logger = logging.getLogger(__name__)


class CacheKey(NamedTuple):
    actor_id: str
    role: Role
    limit: int


class _Entry(NamedTuple):
    results: list[MatchResult]
    expires_at: float


class MatchCache:
    def __init__(
        self,
        ttl_seconds: float = 30 * 60,
        sweep_interval_seconds: float = 30 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[CacheKey, _Entry] = {}
        self._stop_event = threading.Event()
        self._worker: threading.Thread | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: CacheKey) -> list[MatchResult] | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._clock() >= entry.expires_at:
                return None
            return entry.results

    def put(self, key: CacheKey, results: list[MatchResult]) -> None:
        with self._lock:
            self._entries[key] = _Entry(results, self._clock() + self.ttl_seconds)

    def sweep(self) -> int:
        """Drop every expired entry.  Returns the number removed."""
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if now >= e.expires_at]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Swept %d expired match cache entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    # -- background sweep ---------------------------------------------------

    @property
    def running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._worker = threading.Thread(
            target=self._sweep_loop, name="match-cache-sweep", daemon=True,
        )
        self._worker.start()
        logger.info(
            "Match cache sweep started (every %.0fs, ttl %.0fs)",
            self.sweep_interval_seconds, self.ttl_seconds,
        )

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop_event.set()
        if self._worker is not None:
            self._worker.join(timeout)
            self._worker = None
            logger.info("Match cache sweep stopped")

    def _sweep_loop(self) -> None:
        while not self._stop_event.wait(self.sweep_interval_seconds):
            self.sweep()
