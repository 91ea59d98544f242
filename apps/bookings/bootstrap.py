"""
Composition root

Wires directories, the lifecycle and the message bus together.
Every collaborator can be replaced by keyword (tests inject a
FixedClock and fresh directories).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from apps.bookings.application.command_handlers import (
    AcceptBookingCommand,
    AcceptBookingHandler,
    CancelBookingCommand,
    CancelBookingHandler,
    RejectBookingCommand,
    RejectBookingHandler,
    RequestBookingCommand,
    RequestBookingHandler,
)
from apps.bookings.application.lifecycle import BookingLifecycle
from apps.bookings.audit import log_booking_event
from apps.bookings.directory import BookingDirectory
from apps.properties.directory import PropertyDirectory
from apps.users.repositories import InMemoryUserRepository
from apps.users.services import AdminService
from shared.application.message_bus import MessageBus
from shared.domain.base import DomainEvent
from shared.infrastructure.clock import Clock, DjangoClock
from shared.infrastructure.ids import IdAllocator, allocator_from_settings

logger = logging.getLogger(__name__)


@dataclass
class RentalSystem:
    users: InMemoryUserRepository
    listings: PropertyDirectory
    bookings: BookingDirectory
    lifecycle: BookingLifecycle
    admin: AdminService
    message_bus: MessageBus
    id_allocator: IdAllocator
    clock: Clock

    def dispatch(self, command: Any) -> Any:
        return self.message_bus.handle_command(command)

    def next_id(self):
        return self.id_allocator.next_id()


def bootstrap(
    *,
    id_allocator: IdAllocator | None = None,
    clock: Clock | None = None,
    users: InMemoryUserRepository | None = None,
    listings: PropertyDirectory | None = None,
    bookings: BookingDirectory | None = None,
    message_bus: MessageBus | None = None,
) -> RentalSystem:
    id_allocator = id_allocator or allocator_from_settings()
    clock = clock or DjangoClock()
    users = users if users is not None else InMemoryUserRepository()
    listings = listings if listings is not None else PropertyDirectory()
    bookings = bookings if bookings is not None else BookingDirectory()
    message_bus = message_bus or MessageBus()

    lifecycle = BookingLifecycle(
        bookings,
        listings,
        id_allocator=id_allocator,
        clock=clock,
        message_bus=message_bus,
    )

    message_bus.register_command_handler(
        RequestBookingCommand, RequestBookingHandler(lifecycle, users, listings))
    message_bus.register_command_handler(
        AcceptBookingCommand, AcceptBookingHandler(lifecycle, users))
    message_bus.register_command_handler(
        RejectBookingCommand, RejectBookingHandler(lifecycle, users))
    message_bus.register_command_handler(
        CancelBookingCommand, CancelBookingHandler(lifecycle, users))
    message_bus.register_event_handler(DomainEvent, log_booking_event)

    logger.debug(f"Rental system wired with {type(id_allocator).__name__} and {type(clock).__name__}")

    return RentalSystem(
        users=users,
        listings=listings,
        bookings=bookings,
        lifecycle=lifecycle,
        admin=AdminService(users),
        message_bus=message_bus,
        id_allocator=id_allocator,
        clock=clock,
    )
