"""Account administration."""

from __future__ import annotations

import logging
from typing import Hashable

from apps.users.domain.entities import Admin, User
from apps.users.repositories import InMemoryUserRepository
from shared.domain.exceptions import InactiveAccount, ValidationError

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, users: InMemoryUserRepository) -> None:
        self.users = users

    def list_users(self) -> list[User]:
        return self.users.all()

    def deactivate_user(self, admin: Admin, user_id: Hashable) -> User:
        """Deactivate an account; deactivated users can no longer request or accept bookings."""
        if not isinstance(admin, Admin):
            raise ValidationError("Only an admin can deactivate accounts")
        if not admin.is_active:
            raise InactiveAccount("Admin account is deactivated")

        user = self.users.get(user_id)
        user.deactivate()
        logger.info(f"Admin {admin.id} deactivated user {user.id}")
        return user
