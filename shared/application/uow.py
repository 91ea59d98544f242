"""
Unit of Work Pattern

Scopes a consistency boundary (a held lock) and ensures that domain
events are published only after the unit of work commits.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from shared.domain.base import Aggregate, DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the unit of work"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the unit of work"""
        pass

    @abstractmethod
    def collect_events(self, aggregate):
        """Collect events from aggregate root"""
        pass


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """
    In-memory implementation of Unit of Work

    Holds the given lock for the whole block and publishes collected
    domain events to the message bus once the lock has been released.

    Usage:
        with InMemoryUnitOfWork(room_lock, message_bus) as uow:
            # Load aggregate
            booking = directory.get(booking_id)

            # Execute domain logic
            booking.accept()

            # Collect events
            uow.collect_events(booking)

            # Lock is released here
        # Events are published after commit
    """

    def __init__(self, lock, message_bus=None):
        self._lock = lock
        self._message_bus = message_bus
        self._events: List[DomainEvent] = []
        self._pending: List[DomainEvent] = []

    def __enter__(self):
        """Acquire the lock guarding this unit of work"""
        self._lock.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback, release the lock, then publish"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self._lock.release()

        if self._pending:
            events = self._pending
            self._pending = []
            self._publish_events(events)

    def commit(self):
        """
        Commit changes and schedule events

        Events are handed to the message bus only after the lock
        is released, so handlers never run inside the critical section.
        """
        logger.debug(f"Committing unit of work with {len(self._events)} events")
        self._pending.extend(self._events)
        self._events.clear()

    def rollback(self):
        """Discard collected events"""
        if self._events:
            logger.warning(f"Rolling back unit of work, discarding {len(self._events)} events")
        self._events.clear()

    def collect_events(self, aggregate: Aggregate):
        """Take the aggregate's recorded events; they are published on commit"""
        new_events = aggregate.pull_events()
        if new_events:
            self._events.extend(new_events)
            logger.debug(
                f"Collected {len(new_events)} events from "
                f"{aggregate.__class__.__name__} (ID: {aggregate.id})"
            )

    def _publish_events(self, events: List[DomainEvent]):
        """Publish committed events to the message bus"""
        if self._message_bus is None:
            return

        logger.info(f"Publishing {len(events)} domain events after commit")
        self._message_bus.publish_events(events)
