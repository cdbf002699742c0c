"""
Domain entities for the users context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from typing import Optional

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100


@dataclass
class User:
    """A registered user.

    The identifier is assigned by the store: it stays None until a
    repository has successfully persisted the record. Email uniqueness
    is a storage constraint, not something this entity checks.
    """

    name: str
    email: str
    id: Optional[int] = None
