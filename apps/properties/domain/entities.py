"""
Property Domain Entities

- Property: a homeowner's listing at an address, grouping rooms
- Room: a rentable room with an overall availability window

Rooms do not hold their bookings; the booking directory keeps the
room -> bookings relation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Hashable, List

from shared.domain.base import Entity
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import DateRange


class RoomType(Enum):
    SINGLE = 'single'
    DOUBLE = 'double'
    ENSUITE = 'ensuite'
    STUDIO = 'studio'


@dataclass(eq=False, kw_only=True)
class Property(Entity):
    owner_id: Hashable
    address: str
    city_or_area: str
    description: str = ''
    room_ids: List[Hashable] = field(default_factory=list)

    def __post_init__(self):
        if self.owner_id is None:
            raise ValidationError("Property owner must not be None")
        if not self.address or not self.address.strip():
            raise ValidationError("Address must not be blank")
        if not self.city_or_area or not self.city_or_area.strip():
            raise ValidationError("City/area must not be blank")

    def is_owned_by(self, user_id: Hashable) -> bool:
        return self.owner_id == user_id

    def __str__(self):
        return f"Property {self.id}: {self.address}, {self.city_or_area}"


@dataclass(eq=False, kw_only=True)
class Room(Entity):
    """
    Room

    The availability window bounds every booking period requested on the room.
    """
    property_id: Hashable
    availability: DateRange
    room_type: RoomType = RoomType.SINGLE
    monthly_rent: int = 0
    description: str = ''
    amenities: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if self.property_id is None:
            raise ValidationError("Room property must not be None")
        if not isinstance(self.availability, DateRange):
            raise ValidationError("Room availability must be a DateRange")
        if self.monthly_rent < 0:
            raise ValidationError("Rent must not be negative")
        self.amenities = frozenset(self.amenities)

    def is_within_availability(self, period: DateRange) -> bool:
        return self.availability.contains(period)

    def __str__(self):
        return (
            f"Room {self.id} ({self.room_type.value}, {self.monthly_rent}/month) "
            f"available {self.availability}"
        )
