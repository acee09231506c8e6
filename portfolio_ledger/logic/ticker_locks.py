# portfolio_ledger/logic/ticker_locks.py

import logging
import threading
from contextlib import nullcontext
from typing import ContextManager, Dict

logger = logging.getLogger(__name__)


class TickerLocks:
    """
    Hands out one re-entrant lock per normalized ticker.
    Locks are created lazily and live as long as the owning ledger.
    """
    def __init__(self, enabled: bool = True):
        self._enabled = enabled
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def for_ticker(self, ticker: str) -> ContextManager:
        """
        Returns the lock guarding a whole buy/sell for the ticker,
        or a no-op context when per-ticker serialization is disabled.
        """
        if not self._enabled:
            return nullcontext()
        with self._guard:
            lock = self._locks.get(ticker)
            if lock is None:
                lock = threading.RLock()
                self._locks[ticker] = lock
                logger.debug(f"TickerLocks: Created lock for {ticker}.")
            return lock
