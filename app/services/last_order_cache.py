# app/services/last_order_cache.py
"""
Per-session "last order" memory.
Maps an opaque session id to a small immutable snapshot of the most recent
successful order. Entries expire after the session lifetime; every remember() sweeps out
expired entries, so sessions that never come back do not accumulate.
One instance lives on app.state; handlers get it through get_last_order_cache().
"""

import threading
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional
from fastapi import Request
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LastOrderSnapshot:
    order_id: int
    total: Decimal
    when: int           # epoch milliseconds

    def as_dict(self) -> dict:
        return {"orderId": self.order_id, "total": float(self.total), "when": self.when}


class LastOrderCache:
    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, LastOrderSnapshot]] = {}
        self._lock = threading.Lock()

    def remember(self, session_id: str, order_id: int, total: Decimal) -> LastOrderSnapshot:
        now = self._clock()
        snapshot = LastOrderSnapshot(order_id=order_id, total=total, when=int(now * 1000))
        with self._lock:
            self._purge_locked(now)
            self._entries[session_id] = (now + self.ttl_seconds, snapshot)
        return snapshot

    def get(self, session_id: str) -> Optional[LastOrderSnapshot]:
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                return None
            expires_at, snapshot = entry
            if self._clock() >= expires_at:
                del self._entries[session_id]
                return None
            return snapshot

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        with self._lock:
            return self._purge_locked(self._clock())

    def _purge_locked(self, now: float) -> int:
        # caller holds self._lock
        stale = [sid for sid, (expires_at, _) in self._entries.items() if now >= expires_at]
        for sid in stale:
            del self._entries[sid]
        if stale:
            logger.debug(f"Purged {len(stale)} expired last-order entries")
        return len(stale)

    def __len__(self):
        with self._lock:
            return len(self._entries)


def get_last_order_cache(request: Request) -> LastOrderCache:
    """FastAPI dependency: the application's cache instance."""
    return request.app.state.last_orders


def get_session_id(request: Request) -> Optional[str]:
    """FastAPI dependency: session id assigned by the session cookie middleware."""
    return getattr(request.state, "session_id", None)
