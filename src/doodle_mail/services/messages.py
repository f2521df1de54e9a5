"""Message posting and retrieval scoped to rooms."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from doodle_mail.domain.errors import (
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from doodle_mail.domain.messages import Message, MessageDraft
from doodle_mail.domain.participants import Participant, parse_participant
from doodle_mail.domain.rooms import Room
from doodle_mail.services.rooms import RoomRepository

logger = logging.getLogger(__name__)


class MessageRepository(Protocol):
    """Persistence interface for room messages."""

    def create_message(
        self,
        room_id: UUID,
        author: Participant,
        draft: MessageDraft,
        posted_at: datetime,
    ) -> Message:
        """Insert a message and return it."""

    def list_for_room(self, room_id: UUID) -> list[Message]:
        """Return the room's messages, oldest first."""

    def delete_message(self, message_id: UUID) -> bool:
        """Delete a message, returning False when it did not exist."""


@dataclass
class MessageService:
    """Application service for room messages."""

    repository: MessageRepository
    room_repository: RoomRepository

    def get_room_messages(
        self, room_id: UUID, participant: object | None = None
    ) -> list[Message]:
        """Return a room's messages, optionally checking membership first."""
        room = self._require_room(room_id)
        if participant is not None:
            self._require_member(room, parse_participant(participant))
        return self.repository.list_for_room(room.id)

    def post_messages(
        self,
        participant: object,
        room_id: UUID | None,
        drafts: Sequence[MessageDraft] | None,
    ) -> list[Message]:
        """Store drafts from a room member and return the room's messages."""
        author = parse_participant(participant)
        if room_id is None:
            raise InvalidInputError("Missing room id")
        if not drafts:
            raise InvalidInputError("Missing messages")
        for draft in drafts:
            _validate_draft(draft)
        room = self._require_room(room_id)
        self._require_member(room, author)
        posted_at = datetime.now(tz=UTC)
        for draft in drafts:
            self.repository.create_message(room.id, author, draft, posted_at)
        logger.info(
            "Stored %d messages from %s in room %s",
            len(drafts),
            author,
            room.entry_code,
        )
        return self.repository.list_for_room(room.id)

    def delete_message(self, message_id: UUID) -> None:
        """Delete a message by id."""
        if not self.repository.delete_message(message_id):
            raise NotFoundError("Message does not exist")
        logger.info("Deleted message %s", message_id)

    def delete_message_in_room(
        self, message_id: UUID, room_id: UUID
    ) -> list[Message]:
        """Delete a message and return what is left in its room."""
        self.delete_message(message_id)
        if self.room_repository.get_by_id(room_id) is None:
            return []
        return self.repository.list_for_room(room_id)

    def _require_room(self, room_id: UUID) -> Room:
        room = self.room_repository.get_by_id(room_id)
        if room is None:
            raise NotFoundError(f"Room {room_id} does not exist")
        return room

    @staticmethod
    def _require_member(room: Room, participant: Participant) -> None:
        if not room.has_participant(participant):
            raise UnauthorizedError(
                "You are not authorized to access this room's messages."
            )


def _validate_draft(draft: MessageDraft) -> None:
    for name in ("title", "image_data", "background"):
        value = getattr(draft, name)
        if not isinstance(value, str) or not value.strip():
            raise InvalidInputError(f"Message is missing {name}")
