"""
Service: Create and read users.

Input: User entities and identifiers.
Output: User entities.
Side effects: Persists users through the UserRepository port.
Failure cases: StorageError, UserNotFoundError (propagated unchanged).
"""

import logging

from usersapi.domain.users.entities import User
from usersapi.domain.users.ports import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Orchestrates user operations over a UserRepository.

    Each method delegates to the repository one-to-one. This is the
    place for business rules (input normalization, authorization) that
    must not leak into the handlers or the repository.
    """

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def create_user(self, user: User) -> User:
        """Persist a new user and return it with its identifier set."""
        created = self._repository.create(user)
        logger.info("Created user id=%s.", created.id)
        return created

    def get_user_by_id(self, user_id: int) -> User:
        """Return a single user by identifier."""
        logger.debug("Retrieving user id=%d.", user_id)
        return self._repository.find_by_id(user_id)

    def get_all_users(self) -> list[User]:
        """Return every stored user."""
        users = self._repository.find_all()
        logger.debug("Retrieved %d users.", len(users))
        return users
