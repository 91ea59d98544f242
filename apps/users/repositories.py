"""In-memory account storage."""

from __future__ import annotations

import logging
import threading
from typing import Hashable

from apps.users.domain.entities import User
from shared.domain.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """Users indexed by id; emails are unique regardless of case."""

    def __init__(self) -> None:
        self._by_id: dict[Hashable, User] = {}
        self._emails: set[str] = set()
        self._lock = threading.Lock()

    def add(self, user: User) -> User:
        if user is None:
            raise ValidationError("User must not be None")
        email_key = user.email.lower()
        with self._lock:
            if user.id in self._by_id:
                raise ValidationError(f"Duplicate user id: {user.id}")
            if email_key in self._emails:
                raise ValidationError(f"Email already in use: {user.email}")
            self._by_id[user.id] = user
            self._emails.add(email_key)
        logger.debug(f"Registered {user}")
        return user

    def get(self, user_id: Hashable) -> User:
        user = self._by_id.get(user_id)
        if user is None:
            raise NotFound(f"User not found: {user_id}")
        return user

    def all(self) -> list[User]:
        with self._lock:
            return list(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)
