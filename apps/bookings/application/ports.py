"""
Collaborator ports used by the booking lifecycle

The lifecycle never reaches into listing storage directly; it asks
a ListingLookup for rooms and the properties that own them.
"""

from abc import ABC, abstractmethod
from typing import Hashable


class ListingLookup(ABC):
    """Read access to rooms and properties"""

    @abstractmethod
    def get_room(self, room_id: Hashable):
        """Return the room or raise NotFound"""

    @abstractmethod
    def get_property(self, property_id: Hashable):
        """Return the property or raise NotFound"""

    @abstractmethod
    def rooms_for_owner(self, owner_id: Hashable):
        """Return every room whose property belongs to owner_id"""
