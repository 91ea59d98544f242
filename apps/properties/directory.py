"""In-memory listing directory: properties and their rooms."""

from __future__ import annotations

import logging
import threading
from typing import Hashable

from apps.bookings.application.ports import ListingLookup
from apps.properties.domain.entities import Property, Room, RoomType
from shared.domain.exceptions import NotFound, ValidationError
from shared.domain.value_objects import DateRange

logger = logging.getLogger(__name__)


class PropertyDirectory(ListingLookup):
    def __init__(self) -> None:
        self._properties: dict[Hashable, Property] = {}
        self._rooms: dict[Hashable, Room] = {}
        self._lock = threading.Lock()

    def add_property(self, prop: Property) -> Property:
        if prop is None:
            raise ValidationError("Property must not be None")
        with self._lock:
            if prop.id in self._properties:
                raise ValidationError(f"Duplicate property id: {prop.id}")
            self._properties[prop.id] = prop
        logger.debug(f"Listed {prop}")
        return prop

    def add_room(self, room: Room) -> Room:
        if room is None:
            raise ValidationError("Room must not be None")
        with self._lock:
            prop = self._properties.get(room.property_id)
            if prop is None:
                raise NotFound(f"Property not found: {room.property_id}")
            if room.id in self._rooms:
                raise ValidationError(f"Duplicate room id: {room.id}")
            self._rooms[room.id] = room
            prop.room_ids.append(room.id)
        logger.debug(f"Listed {room} under property {prop.id}")
        return room

    def get_property(self, property_id: Hashable) -> Property:
        prop = self._properties.get(property_id)
        if prop is None:
            raise NotFound(f"Property not found: {property_id}")
        return prop

    def get_room(self, room_id: Hashable) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise NotFound(f"Room not found: {room_id}")
        return room

    def rooms_for_owner(self, owner_id: Hashable) -> list[Room]:
        with self._lock:
            return [
                room for room in self._rooms.values()
                if self._properties[room.property_id].owner_id == owner_id
            ]

    def search_rooms(
        self,
        city: str | None = None,
        room_type: RoomType | None = None,
        min_rent: int | None = None,
        max_rent: int | None = None,
        period: DateRange | None = None,
    ) -> list[Room]:
        """
        Rooms matching every given criterion

        City matches the property's city/area case-insensitively; the
        rent bounds are inclusive; a period must fit inside the room's
        availability window. Accepted bookings are not considered here.
        """
        if min_rent is not None and max_rent is not None and min_rent > max_rent:
            raise ValidationError(f"Minimum rent {min_rent} is above maximum rent {max_rent}")
        if period is not None and not isinstance(period, DateRange):
            raise ValidationError("Period must be a DateRange")
        city_key = city.strip().lower() if city and city.strip() else None

        with self._lock:
            candidates = [
                (room, self._properties[room.property_id]) for room in self._rooms.values()
            ]

        results = []
        for room, prop in candidates:
            if city_key is not None and prop.city_or_area.strip().lower() != city_key:
                continue
            if room_type is not None and room.room_type != room_type:
                continue
            if min_rent is not None and room.monthly_rent < min_rent:
                continue
            if max_rent is not None and room.monthly_rent > max_rent:
                continue
            if period is not None and not room.is_within_availability(period):
                continue
            results.append(room)

        logger.debug(f"Room search matched {len(results)} of {len(candidates)} rooms")
        return results

    def all_properties(self) -> list[Property]:
        with self._lock:
            return list(self._properties.values())
