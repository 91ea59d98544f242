"""
Keyed locks

In-process replacement for row-level SELECT FOR UPDATE: one re-entrant
lock per key (e.g. per room), created on first use.
"""

import logging
import threading
from typing import Dict, Hashable

logger = logging.getLogger(__name__)


class KeyedLocks:
    """Registry of re-entrant locks indexed by key"""

    def __init__(self):
        self._locks: Dict[Hashable, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def for_key(self, key: Hashable) -> threading.RLock:
        """Return the lock for key, creating it if needed"""
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
                logger.debug(f"Created lock for key {key}")
            return lock

    def __len__(self):
        with self._registry_lock:
            return len(self._locks)
