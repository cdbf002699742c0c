"""
Pydantic schemas for users API request/response validation.

These schemas define the wire representation of a User: lower-case
JSON keys, bounded-length strings. No business logic belongs here.
"""

from pydantic import BaseModel, ConfigDict, Field

from usersapi.domain.users.entities import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, User


class UserCreateRequest(BaseModel):
    """Request schema for the create-user endpoint.

    Attributes:
        name: Display name (1-100 chars).
        email: Email address (1-100 chars). Uniqueness is enforced by storage.

    An ``id`` key in the body is accepted and ignored: identifiers are
    always assigned by the store.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LENGTH)

    def to_entity(self) -> User:
        return User(name=self.name, email=self.email)


class UserResponse(BaseModel):
    """A stored user as returned by every users endpoint."""

    id: int
    name: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
