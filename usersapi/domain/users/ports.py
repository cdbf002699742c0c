"""
Port interfaces (ABCs) for the users context.

Ports define the contracts that the service requires from storage.
Infrastructure adapters implement these interfaces, so the storage
engine can be swapped without touching the service or the handlers.
"""

from abc import ABC, abstractmethod

from usersapi.domain.users.entities import User


class UserRepository(ABC):
    """Port for persisting and retrieving users."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Insert a new user.

        On success the store-assigned identifier is written to ``user.id``
        and the same entity is returned.

        Raises:
            StorageError: If the store rejects the record.
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, user_id: int) -> User:
        """Return the user with the given identifier.

        Raises:
            UserNotFoundError: If no such user exists.
            StorageError: If the store cannot be queried.
        """
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[User]:
        """Return every stored user, ordered by identifier.

        Returns an empty list when no users exist.
        """
        raise NotImplementedError
