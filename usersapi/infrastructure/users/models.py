"""SQLAlchemy models for the users table."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from usersapi.domain.users.entities import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, User


class Base(DeclarativeBase):
    """Declarative base shared by all users-api tables."""


class UserModel(Base):
    """Storage representation of a User.

    The primary key is assigned by the database on insert; email carries
    the uniqueness constraint.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH),
        unique=True,
        nullable=False,
        index=True,
    )

    @classmethod
    def from_entity(cls, user: User) -> "UserModel":
        return cls(name=user.name, email=user.email)

    def to_entity(self) -> User:
        return User(id=self.id, name=self.name, email=self.email)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"
