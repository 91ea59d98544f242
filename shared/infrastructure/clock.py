"""
Clock

Time source injected into the domain services so "today" and "now"
are never read from the system clock directly inside business checks.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime

from django.utils import timezone


class Clock(ABC):
    """Abstract time source"""

    @abstractmethod
    def now(self) -> datetime:
        pass

    @abstractmethod
    def today(self) -> date:
        pass


class DjangoClock(Clock):
    """
    Clock backed by django.utils.timezone

    Honors the TIME_ZONE and USE_TZ settings.
    """

    def now(self) -> datetime:
        return timezone.now()

    def today(self) -> date:
        return timezone.localdate()


class FixedClock(Clock):
    """Clock frozen at a given instant; can be moved forward manually"""

    def __init__(self, current: datetime):
        self._current = current

    def now(self) -> datetime:
        return self._current

    def today(self) -> date:
        return self._current.date()

    def set(self, current: datetime):
        self._current = current
