"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after the unit of work commits.
"""

from dataclasses import dataclass
from typing import Hashable

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange


@dataclass(kw_only=True)
class BookingRequested(DomainEvent):
    """
    Event: A student requested a room (new booking in REQUESTED)

    Triggers:
    - Homeowner's pending requests view
    - Audit log
    """
    booking_id: Hashable
    student_id: Hashable
    room_id: Hashable
    period: DateRange


@dataclass(kw_only=True)
class BookingAccepted(DomainEvent):
    """
    Event: Homeowner accepted a booking (REQUESTED -> ACCEPTED)

    From this moment the period blocks the room.
    """
    booking_id: Hashable
    room_id: Hashable
    period: DateRange


@dataclass(kw_only=True)
class BookingRejected(DomainEvent):
    """
    Event: Booking rejected (REQUESTED -> REJECTED)

    reason is 'owner' for a homeowner decision and 'conflict' when the
    room was already taken at accept time.
    """
    booking_id: Hashable
    room_id: Hashable
    reason: str


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """Event: Student cancelled a booking"""
    booking_id: Hashable
    room_id: Hashable
    old_status: str
