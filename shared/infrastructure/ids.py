"""
Identifier allocation

Entities never generate their own ids; an allocator is injected into
whichever service creates them.
"""

import itertools
import threading
from abc import ABC, abstractmethod
from typing import Hashable
from uuid import uuid4

from django.conf import settings


class IdAllocator(ABC):
    """Hands out unique identifiers"""

    @abstractmethod
    def next_id(self) -> Hashable:
        pass


class CounterIdAllocator(IdAllocator):
    """Monotonic integer ids, safe to share between threads"""

    def __init__(self, start: int = 1):
        if start < 1:
            raise ValueError("Counter start must be positive")
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._counter)


class UUIDAllocator(IdAllocator):
    """Random UUID4 ids"""

    def next_id(self):
        return uuid4()


def allocator_from_settings() -> IdAllocator:
    """Build the allocator selected by RENTALS_ID_ALLOCATOR"""
    kind = getattr(settings, 'RENTALS_ID_ALLOCATOR', 'counter')
    if kind == 'uuid':
        return UUIDAllocator()
    if kind == 'counter':
        return CounterIdAllocator(start=getattr(settings, 'RENTALS_ID_START', 1))
    raise ValueError(f"Unknown RENTALS_ID_ALLOCATOR: {kind}")
