"""User profile lookups."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from doodle_mail.domain.errors import NotFoundError
from doodle_mail.domain.users import UserProfile


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the public profile for a user id, if present."""


@dataclass
class UserService:
    """Application service for user lookups."""

    repository: UserRepository

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return a user's public profile."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFoundError("User does not exist")
        return profile
