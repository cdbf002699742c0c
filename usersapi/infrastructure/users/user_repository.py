"""
Adapter: User repository backed by a relational database.

Implements the UserRepository port with SQLAlchemy.
Every call opens a short session on the shared engine; the engine's
connection pool provides the concurrency guarantee.
"""

import logging

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from usersapi.domain.users.entities import User
from usersapi.domain.users.errors import StorageError, UserNotFoundError
from usersapi.domain.users.ports import UserRepository
from usersapi.infrastructure.users.models import UserModel

logger = logging.getLogger(__name__)


def _storage_error(exc: SQLAlchemyError) -> StorageError:
    # Driver messages carry the statement; keep only the original reason.
    reason = getattr(exc, "orig", None) or exc
    return StorageError(str(reason).strip())


class SqlAlchemyUserRepository(UserRepository):
    """Persists users to a SQL database.

    Implements the UserRepository port defined in the domain layer.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, user: User) -> User:
        """Insert a user and populate its identifier.

        Args:
            user: The user to persist. ``user.id`` is ignored.

        Returns:
            The same entity, with ``id`` set by the database.
        """
        row = UserModel.from_entity(user)
        try:
            with Session(self._engine) as session, session.begin():
                session.add(row)
                session.flush()
                new_id = row.id
        except SQLAlchemyError as exc:
            logger.warning("Insert into users failed: %s", type(exc).__name__)
            raise _storage_error(exc) from exc

        user.id = new_id
        logger.debug("Inserted user id=%d.", user.id)
        return user

    def find_by_id(self, user_id: int) -> User:
        """Return the user with the given id.

        Raises:
            UserNotFoundError: If no row matches.
        """
        try:
            with Session(self._engine) as session:
                row = session.get(UserModel, user_id)
                user = row.to_entity() if row is not None else None
        except SQLAlchemyError as exc:
            raise _storage_error(exc) from exc

        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def find_all(self) -> list[User]:
        """Return every user ordered by id."""
        query = select(UserModel).order_by(UserModel.id)
        try:
            with Session(self._engine) as session:
                return [row.to_entity() for row in session.scalars(query)]
        except SQLAlchemyError as exc:
            raise _storage_error(exc) from exc
