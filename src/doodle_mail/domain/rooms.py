"""Domain models for chat rooms."""

from dataclasses import dataclass
from uuid import UUID

from doodle_mail.domain.participants import Participant


@dataclass(frozen=True)
class Room:
    """Represents a persisted room and its current members."""

    id: UUID
    entry_code: str
    participants: tuple[Participant, ...]
    message_ids: tuple[UUID, ...] = ()

    def has_participant(self, participant: Participant) -> bool:
        return participant in self.participants


@dataclass(frozen=True)
class StillActive:
    """Leave outcome when the room keeps at least one participant."""

    room: Room


@dataclass(frozen=True)
class RoomDeleted:
    """Leave outcome when the last participant left and the room is gone."""

    entry_code: str


LeaveOutcome = StillActive | RoomDeleted
