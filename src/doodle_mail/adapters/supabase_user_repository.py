"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from doodle_mail.adapters.supabase_query import execute
from doodle_mail.domain.users import UserProfile
from doodle_mail.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user lookups."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the public columns of a user row, if present."""
        response = execute(
            self.client.table("users")
            .select("id, name, email")
            .eq("id", str(user_id))
            .limit(1),
            "get user",
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserProfile(
            id=UUID(str(row["id"])),
            name=str(row["name"]),
            email=str(row["email"]),
        )
