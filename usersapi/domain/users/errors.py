"""
Storage errors for the users context.

All errors raised through the repository port are defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class StorageError(Exception):
    """Base error for every failed repository operation."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class UserNotFoundError(StorageError):
    """Raised when no user exists with the requested identifier."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class StorageConnectionError(StorageError):
    """Raised when the storage backend cannot be reached at startup."""
