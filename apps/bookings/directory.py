"""
Booking Directory

In-memory registry of bookings with the indexes the lifecycle and the
listing queries need:

- bookings by id
- room id -> booking ids, in insertion order (the room/booking relation)
- student id -> booking ids, in insertion order

Bookings are only ever added; links are never removed.
"""

from __future__ import annotations

import logging
import threading
from typing import Hashable, Iterable

from apps.bookings.domain.entities import Booking
from shared.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


class BookingDirectory:
    def __init__(self) -> None:
        self._bookings: dict[Hashable, Booking] = {}
        self._by_room: dict[Hashable, list[Hashable]] = {}
        self._by_student: dict[Hashable, list[Hashable]] = {}
        self._lock = threading.RLock()

    def add(self, booking: Booking) -> Booking:
        """Register a booking and link it to its room and student."""
        if booking is None:
            raise ValidationError("Booking must not be None")
        with self._lock:
            if booking.id in self._bookings:
                raise ValidationError(f"Duplicate booking id: {booking.id}")
            self._bookings[booking.id] = booking
            self._by_room.setdefault(booking.room_id, []).append(booking.id)
            self._by_student.setdefault(booking.student_id, []).append(booking.id)
        logger.debug(f"Linked booking {booking.id} to room {booking.room_id}")
        return booking

    def get(self, booking_id: Hashable) -> Booking:
        with self._lock:
            booking = self._bookings.get(booking_id)
        if booking is None:
            raise NotFound(f"Booking not found: {booking_id}")
        return booking

    def find(self, booking_id: Hashable) -> Booking | None:
        with self._lock:
            return self._bookings.get(booking_id)

    def for_room(self, room_id: Hashable) -> list[Booking]:
        return self._resolve(self._by_room, room_id)

    def for_student(self, student_id: Hashable) -> list[Booking]:
        return self._resolve(self._by_student, student_id)

    def for_rooms(self, room_ids: Iterable[Hashable]) -> list[Booking]:
        """Bookings of several rooms, ordered by registration."""
        wanted = set(room_ids)
        with self._lock:
            return [b for b in self._bookings.values() if b.room_id in wanted]

    def all(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings.values())

    def _resolve(self, index: dict[Hashable, list[Hashable]], key: Hashable) -> list[Booking]:
        with self._lock:
            return [self._bookings[booking_id] for booking_id in index.get(key, ())]

    def __len__(self) -> int:
        with self._lock:
            return len(self._bookings)

    def __contains__(self, booking_id: Hashable) -> bool:
        with self._lock:
            return booking_id in self._bookings
