"""
Base Domain Classes

Building blocks shared by the accounts, listings and bookings domains:
- Entity: identified by an allocated id, compared by class and id
- Aggregate: an entity that records domain events until a unit of work
  pulls them
- DomainEvent: a fact about a state change, published after commit

Value objects (e.g. DateRange) are plain frozen dataclasses.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Hashable, List
from uuid import UUID, uuid4

from django.utils import timezone


@dataclass(eq=False, kw_only=True)
class Entity:
    """
    Base class for users, properties, rooms and bookings

    Ids come from an IdAllocator and may be ints or UUIDs; an entity
    never creates its own.
    """
    id: Hashable

    def __eq__(self, other):
        return isinstance(other, self.__class__) and self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass(eq=False, kw_only=True)
class Aggregate(Entity):
    """Entity whose state changes emit domain events"""
    _pending: List['DomainEvent'] = field(default_factory=list, repr=False, init=False)

    def add_event(self, event: 'DomainEvent'):
        self._pending.append(event)

    @property
    def pending_events(self) -> List['DomainEvent']:
        return list(self._pending)

    def pull_events(self) -> List['DomainEvent']:
        """Return the recorded events and forget them"""
        events, self._pending = self._pending, []
        return events


@dataclass(kw_only=True)
class DomainEvent:
    """
    Base class for domain events

    occurred_at is timezone-aware (django.utils.timezone).
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=timezone.now)
    aggregate_id: Hashable = None

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        """Envelope fields shared by every event, as strings"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.event_type,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': None if self.aggregate_id is None else str(self.aggregate_id),
        }
