"""Supabase-backed message repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from doodle_mail.adapters.supabase_query import execute
from doodle_mail.domain.errors import StoreError
from doodle_mail.domain.messages import Message, MessageDraft
from doodle_mail.domain.participants import Participant, parse_participant
from doodle_mail.services.messages import MessageRepository

_MESSAGE_COLUMNS = "id, room_id, author, title, image_data, background, created_at"


@dataclass
class SupabaseMessageRepository(MessageRepository):
    """Supabase implementation for room messages."""

    client: Client

    def create_message(
        self,
        room_id: UUID,
        author: Participant,
        draft: MessageDraft,
        posted_at: datetime,
    ) -> Message:
        """Insert a message row and return it."""
        response = execute(
            self.client.table("messages").insert(
                {
                    "room_id": str(room_id),
                    "author": author.to_payload(),
                    "title": draft.title,
                    "image_data": draft.image_data,
                    "background": draft.background,
                    "created_at": posted_at.isoformat(),
                }
            ),
            "create message",
        )
        if not response.data:
            raise StoreError("Failed to create message")
        return _parse_message(response.data[0])

    def list_for_room(self, room_id: UUID) -> list[Message]:
        """Return the room's messages, oldest first."""
        response = execute(
            self.client.table("messages")
            .select(_MESSAGE_COLUMNS)
            .eq("room_id", str(room_id))
            .order("created_at"),
            "list messages",
        )
        return [_parse_message(row) for row in response.data or []]

    def delete_message(self, message_id: UUID) -> bool:
        """Delete a message row, returning False when nothing matched."""
        response = execute(
            self.client.table("messages").delete().eq("id", str(message_id)),
            "delete message",
        )
        return bool(response.data)


def _parse_message(row: dict[str, object]) -> Message:
    """Parse a message row into a domain model."""
    return Message(
        id=UUID(str(row["id"])),
        room_id=UUID(str(row["room_id"])),
        author=parse_participant(row["author"]),
        title=str(row.get("title", "")),
        image_data=str(row.get("image_data", "")),
        background=str(row.get("background", "")),
        date=datetime.fromisoformat(str(row["created_at"])),
    )
