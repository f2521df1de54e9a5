"""Room membership state machine."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from doodle_mail.domain.errors import (
    DuplicateParticipantError,
    EntryCodeTakenError,
    InvalidInputError,
    NotFoundError,
)
from doodle_mail.domain.participants import Participant, parse_participant
from doodle_mail.domain.rooms import LeaveOutcome, Room, RoomDeleted
from doodle_mail.services.codes import CodeLookup, RoomCodeGenerator

logger = logging.getLogger(__name__)


class RoomRepository(CodeLookup, Protocol):
    """Persistence interface for rooms."""

    def create_room(self, entry_code: str, participant: Participant) -> Room:
        """Insert a room with a single participant.

        Raises ``EntryCodeTakenError`` when the code is already in use.
        """

    def get_by_code(self, entry_code: str) -> Room | None:
        """Return the room using the entry code, if present."""

    def get_by_id(self, room_id: UUID) -> Room | None:
        """Return a room by id, if present."""

    def list_rooms(self) -> list[Room]:
        """Return every existing room."""

    def add_participant(
        self, entry_code: str, participant: Participant
    ) -> Room | None:
        """Add the participant unless already present.

        Returns the updated room, or None when nothing changed.
        """

    def remove_participant(
        self, entry_code: str, participant: Participant
    ) -> LeaveOutcome | None:
        """Remove the participant and delete the room if it became empty.

        Returns None when no room uses the entry code.
        """


@dataclass
class RoomService:
    """Create, join and leave rooms."""

    repository: RoomRepository
    code_generator: RoomCodeGenerator

    def create_room(self, participant: object) -> Room:
        """Create a room whose only member is the given participant."""
        member = parse_participant(participant)
        attempts = 0
        while True:
            entry_code, attempts = self.code_generator.generate(attempts)
            try:
                room = self.repository.create_room(entry_code, member)
            except EntryCodeTakenError:
                logger.info("Room code %s was claimed concurrently", entry_code)
                continue
            logger.info("Created room %s for %s", room.entry_code, member)
            return room

    def join_room(self, participant: object, entry_code: str | None) -> Room:
        """Add a participant to an existing room."""
        code = _require_code(entry_code)
        member = parse_participant(participant)
        room = self.repository.get_by_code(code)
        if room is None:
            raise NotFoundError("Room does not exist.")
        if room.has_participant(member):
            raise DuplicateParticipantError()
        updated = self.repository.add_participant(code, member)
        if updated is None:
            if self.repository.get_by_code(code) is None:
                raise NotFoundError("Room does not exist.")
            raise DuplicateParticipantError()
        logger.info("%s joined room %s", member, code)
        return updated

    def leave_room(self, participant: object, entry_code: str | None) -> LeaveOutcome:
        """Remove a participant, deleting the room once nobody is left."""
        code = _require_code(entry_code)
        member = parse_participant(participant)
        outcome = self.repository.remove_participant(code, member)
        if outcome is None:
            raise NotFoundError("Room does not exist.")
        if isinstance(outcome, RoomDeleted):
            logger.info("%s left room %s; room deleted", member, code)
        else:
            logger.info("%s left room %s", member, code)
        return outcome

    def get_room_info(self, entry_code: str) -> Room | None:
        """Return the room for an entry code, if present."""
        return self.repository.get_by_code(_require_code(entry_code))

    def get_room_by_id(self, room_id: UUID) -> Room | None:
        """Return the room for an id, if present."""
        return self.repository.get_by_id(room_id)

    def list_rooms(self) -> list[Room]:
        """Return all rooms."""
        return self.repository.list_rooms()


def _require_code(entry_code: str | None) -> str:
    if entry_code is None or not entry_code.strip():
        raise InvalidInputError("Missing room code")
    return entry_code.strip()
