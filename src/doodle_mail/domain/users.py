"""Domain models for registered users."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserProfile:
    """Public projection of a user record."""

    id: UUID
    name: str
    email: str
