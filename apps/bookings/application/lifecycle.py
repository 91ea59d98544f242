"""
Booking Lifecycle

The use cases of the booking domain: request, accept, reject and cancel.

Double booking prevention:
1. Every mutation runs inside a unit of work holding the room's lock
2. Availability is re-checked under that lock at request time AND at
   accept time, so two overlapping requests racing to be accepted
   cannot both win
3. A booking that loses the race at accept time is moved to REJECTED
   before the conflict is reported
"""

from __future__ import annotations

import logging
from typing import Hashable, List

from apps.bookings.application.ports import ListingLookup
from apps.bookings.directory import BookingDirectory
from apps.bookings.domain.availability import AvailabilityChecker
from apps.bookings.domain.entities import Booking, BookingStatus, RejectionReason
from apps.users.domain.entities import Homeowner, Student
from shared.application.message_bus import MessageBus
from shared.application.uow import InMemoryUnitOfWork
from shared.domain.exceptions import (
    InactiveAccount,
    InvalidState,
    NotOwner,
    OutOfWindow,
    RoomConflict,
    ValidationError,
)
from shared.domain.value_objects import DateRange
from shared.infrastructure.clock import Clock
from shared.infrastructure.ids import IdAllocator
from shared.infrastructure.locks import KeyedLocks

logger = logging.getLogger(__name__)


class BookingLifecycle:
    """
    Orchestrates booking status transitions

    Authorization (who may act) is checked here; the Booking aggregate
    only guards which transitions are legal from which status.
    """

    def __init__(
        self,
        bookings: BookingDirectory,
        listings: ListingLookup,
        *,
        id_allocator: IdAllocator,
        clock: Clock,
        checker: AvailabilityChecker | None = None,
        room_locks: KeyedLocks | None = None,
        message_bus: MessageBus | None = None,
    ):
        self.bookings = bookings
        self.listings = listings
        self.id_allocator = id_allocator
        self.clock = clock
        self.checker = checker or AvailabilityChecker()
        self.room_locks = room_locks or KeyedLocks()
        self.message_bus = message_bus

    # ===== Commands =====

    def request_booking(self, student: Student, room, period: DateRange) -> Booking:
        """
        Student requests a room for a period

        Returns: the new Booking in REQUESTED status

        Raises:
            ValidationError, InactiveAccount, NotFound, OutOfWindow, RoomConflict
        """
        if student is None or room is None or period is None:
            raise ValidationError("Student, room and period must not be None")
        if not isinstance(student, Student):
            raise ValidationError("Only students can request bookings")
        if not isinstance(period, DateRange):
            raise ValidationError("Period must be a DateRange")
        if not student.is_active:
            raise InactiveAccount("Student account is deactivated")

        # Resolve through the directory so unknown rooms fail as NotFound
        room = self.listings.get_room(room.id)

        if not self.checker.is_within_availability(room, period):
            raise OutOfWindow(
                f"Requested dates {period} are outside the availability window "
                f"{room.availability} of room {room.id}"
            )

        with self._unit_of_work(room.id) as uow:
            existing = self.bookings.for_room(room.id)
            if not self.checker.is_free(room, period, existing):
                raise self._conflict(room, period, existing)

            booking = Booking.request(
                booking_id=self.id_allocator.next_id(),
                student_id=student.id,
                room_id=room.id,
                period=period,
                requested_at=self.clock.now(),
            )
            self.bookings.add(booking)
            uow.collect_events(booking)

        logger.info(f"Booking {booking.id} requested by student {student.id} for room {room.id} {period}")
        return booking

    def accept_booking(self, homeowner: Homeowner, booking_id: Hashable) -> Booking:
        """
        Homeowner accepts a booking for a room they own

        Re-checks availability against the room's ACCEPTED bookings.
        On conflict the booking is REJECTED and RoomConflict is raised.
        """
        booking = self.bookings.get(booking_id)
        self._require_homeowner(homeowner)
        if not homeowner.is_active:
            raise InactiveAccount("Homeowner account is deactivated")

        room = self.listings.get_room(booking.room_id)
        self._require_property_owner(homeowner, room)

        conflict = None
        with self._unit_of_work(room.id) as uow:
            self._require_requested(booking, 'accepted')

            existing = self.bookings.for_room(room.id)
            if self.checker.is_free(room, booking.period, existing, exclude=booking.id):
                booking.accept(self.clock.now())
            else:
                booking.reject(RejectionReason.CONFLICT, self.clock.now())
                conflict = self._conflict(room, booking.period, existing, exclude=booking.id)
            uow.collect_events(booking)

        if conflict is not None:
            logger.warning(
                f"Booking {booking.id} rejected at accept time: room {room.id} "
                f"already accepted {list(conflict.conflicting_ids)}"
            )
            raise conflict

        logger.info(f"Booking {booking.id} accepted by homeowner {homeowner.id}")
        return booking

    def reject_booking(self, homeowner: Homeowner, booking_id: Hashable) -> Booking:
        """Homeowner rejects a REQUESTED booking for a room they own"""
        booking = self.bookings.get(booking_id)
        self._require_homeowner(homeowner)

        room = self.listings.get_room(booking.room_id)
        self._require_property_owner(homeowner, room)

        with self._unit_of_work(room.id) as uow:
            self._require_requested(booking, 'rejected')
            booking.reject(RejectionReason.OWNER, self.clock.now())
            uow.collect_events(booking)

        logger.info(f"Booking {booking.id} rejected by homeowner {homeowner.id}")
        return booking

    def cancel_booking(self, student: Student, booking_id: Hashable) -> Booking:
        """
        Student cancels their own booking

        Allowed from any status; cancelling an already cancelled
        booking is a no-op.
        """
        booking = self.bookings.get(booking_id)
        if student is None or not isinstance(student, Student):
            raise ValidationError("A student is required to cancel a booking")
        if booking.student_id != student.id:
            raise NotOwner("You can only cancel your own bookings")

        with self._unit_of_work(booking.room_id) as uow:
            if booking.is_cancelled:
                logger.debug(f"Booking {booking.id} already cancelled")
                return booking
            booking.cancel(self.clock.now())
            uow.collect_events(booking)

        logger.info(f"Booking {booking.id} cancelled by student {student.id}")
        return booking

    # ===== Queries =====

    def get_booking(self, booking_id: Hashable) -> Booking:
        return self.bookings.get(booking_id)

    def is_room_free(self, room, period: DateRange) -> bool:
        """Checks ACCEPTED bookings only; REQUESTED bookings do not block"""
        if room is None or period is None:
            raise ValidationError("Room and period must not be None")
        if not isinstance(period, DateRange):
            raise ValidationError("Period must be a DateRange")

        room = self.listings.get_room(room.id)
        with self.room_locks.for_key(room.id):
            return self.checker.is_free(room, period, self.bookings.for_room(room.id))

    def has_booking_ended(self, booking: Booking) -> bool:
        """A booking has ended once today reaches the (exclusive) end date"""
        if booking is None:
            raise ValidationError("Booking must not be None")
        return self.clock.today() >= booking.period.end

    def list_for_student(self, student: Student) -> List[Booking]:
        if student is None:
            raise ValidationError("Student must not be None")
        return self.bookings.for_student(student.id)

    def list_for_homeowner(self, homeowner: Homeowner) -> List[Booking]:
        if homeowner is None:
            raise ValidationError("Homeowner must not be None")
        room_ids = [room.id for room in self.listings.rooms_for_owner(homeowner.id)]
        return self.bookings.for_rooms(room_ids)

    def list_pending_for_homeowner(self, homeowner: Homeowner) -> List[Booking]:
        return [
            booking for booking in self.list_for_homeowner(homeowner)
            if booking.status == BookingStatus.REQUESTED
        ]

    # ===== Helpers =====

    def _unit_of_work(self, room_id: Hashable) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(self.room_locks.for_key(room_id), self.message_bus)

    def _conflict(self, room, period: DateRange, existing, exclude: Hashable = None) -> RoomConflict:
        blockers = self.checker.conflicts(room, period, existing, exclude=exclude)
        return RoomConflict(
            f"Room {room.id} is not available for {period}: "
            f"overlaps {len(blockers)} accepted booking(s)",
            conflicting_ids=[b.id for b in blockers],
        )

    @staticmethod
    def _require_homeowner(homeowner):
        if homeowner is None or not isinstance(homeowner, Homeowner):
            raise ValidationError("A homeowner is required for this action")

    def _require_property_owner(self, homeowner: Homeowner, room):
        prop = self.listings.get_property(room.property_id)
        if not prop.is_owned_by(homeowner.id):
            raise NotOwner("You do not own the property for this booking")

    @staticmethod
    def _require_requested(booking: Booking, action: str):
        if booking.status != BookingStatus.REQUESTED:
            raise InvalidState(
                f"Only REQUESTED bookings can be {action}; "
                f"booking {booking.id} is {booking.status.value}"
            )
