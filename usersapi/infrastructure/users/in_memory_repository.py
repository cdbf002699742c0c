"""
Adapter: In-memory user repository.

Implements the UserRepository port over a plain dict keyed by id.
Suitable for tests and local runs without a database. A lock makes it
safe to share between request threads.
"""

import threading
from dataclasses import replace

from usersapi.domain.users.entities import User
from usersapi.domain.users.errors import StorageError, UserNotFoundError
from usersapi.domain.users.ports import UserRepository


class InMemoryUserRepository(UserRepository):
    """Key-value user store with sequential identifiers.

    Mirrors the relational backend's constraints: identifiers start at 1
    and emails are unique.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[int, User] = {}
        self._next_id = 1

    def create(self, user: User) -> User:
        with self._lock:
            if any(stored.email == user.email for stored in self._users.values()):
                raise StorageError(f"duplicate email: {user.email}")
            user.id = self._next_id
            self._next_id += 1
            self._users[user.id] = replace(user)
        return user

    def find_by_id(self, user_id: int) -> User:
        with self._lock:
            stored = self._users.get(user_id)
        if stored is None:
            raise UserNotFoundError(user_id)
        return replace(stored)

    def find_all(self) -> list[User]:
        with self._lock:
            return [replace(self._users[key]) for key in sorted(self._users)]
