"""
Availability Checker

This is the CRITICAL check for preventing double bookings.
Every request and every accept MUST re-run it against the room's
current bookings; results are never cached.

Rules:
1. Only ACCEPTED bookings block a room; REQUESTED ones never do
2. Overlap is half-open: a booking ending on day X does not block a
   booking starting on day X
3. The requested period must lie entirely inside the room's
   availability window (checked at request time only)
"""

from typing import Hashable, Iterable, List

from apps.bookings.domain.entities import Booking
from shared.domain.value_objects import DateRange


class AvailabilityChecker:
    """
    Stateless availability decisions for a room

    Usage:
        # Under the room lock
        bookings = directory.for_room(room.id)
        if checker.is_free(room, period, bookings):
            ...
    """

    def is_free(self, room, period: DateRange, bookings: Iterable[Booking],
                exclude: Hashable = None) -> bool:
        """
        Check if period is free on room

        Returns False on the first ACCEPTED booking of the room that
        overlaps period, True otherwise.
        """
        for booking in self._blockers(room, bookings, exclude):
            if booking.period.overlaps(period):
                return False
        return True

    def conflicts(self, room, period: DateRange, bookings: Iterable[Booking],
                  exclude: Hashable = None) -> List[Booking]:
        """All ACCEPTED bookings of room that overlap period"""
        return [
            booking for booking in self._blockers(room, bookings, exclude)
            if booking.period.overlaps(period)
        ]

    def is_within_availability(self, room, period: DateRange) -> bool:
        """Check that period lies entirely inside the room's availability window"""
        return room.is_within_availability(period)

    @staticmethod
    def _blockers(room, bookings: Iterable[Booking], exclude: Hashable):
        for booking in bookings:
            if booking.room_id != room.id:
                continue
            if exclude is not None and booking.id == exclude:
                continue
            if booking.blocks_dates:
                yield booking
