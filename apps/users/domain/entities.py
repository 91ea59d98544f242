"""
User Domain Entities

Accounts acting on the rental platform:
- Student: requests and cancels bookings
- Homeowner: owns properties, accepts or rejects bookings
- Admin: manages accounts
"""

from dataclasses import dataclass
from enum import Enum

from shared.domain.base import Entity
from shared.domain.exceptions import ValidationError


class AccountStatus(Enum):
    """Account status; only ACTIVE accounts may act"""
    ACTIVE = 'active'
    DEACTIVATED = 'deactivated'


def _require_text(value: str, field_name: str):
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} must not be blank")


@dataclass(eq=False, kw_only=True)
class User(Entity):
    """
    Base account

    Identity is the id; email is unique across the platform
    (enforced by the repository).
    """
    name: str
    email: str
    status: AccountStatus = AccountStatus.ACTIVE

    def __post_init__(self):
        _require_text(self.name, 'name')
        _require_text(self.email, 'email')

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    def deactivate(self):
        self.status = AccountStatus.DEACTIVATED

    def __str__(self):
        return f"{self.__class__.__name__}(id={self.id}, name='{self.name}', status={self.status.value})"


@dataclass(eq=False, kw_only=True)
class Student(User):
    university_name: str
    student_number: str
    verified: bool = False

    def __post_init__(self):
        super().__post_init__()
        _require_text(self.university_name, 'university_name')
        _require_text(self.student_number, 'student_number')


@dataclass(eq=False, kw_only=True)
class Homeowner(User):
    """Owns properties; decides on booking requests for their rooms"""


@dataclass(eq=False, kw_only=True)
class Admin(User):
    """Manages accounts"""
