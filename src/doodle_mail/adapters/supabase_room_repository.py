"""Supabase-backed room repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from doodle_mail.adapters.supabase_query import execute
from doodle_mail.domain.errors import EntryCodeTakenError, StoreError
from doodle_mail.domain.participants import Participant, parse_participant
from doodle_mail.domain.rooms import LeaveOutcome, Room, RoomDeleted, StillActive
from doodle_mail.services.rooms import RoomRepository

_ROOM_COLUMNS = "id, entry_code, participants, messages(id)"


@dataclass
class SupabaseRoomRepository(RoomRepository):
    """Supabase implementation for room persistence."""

    client: Client

    def code_exists(self, entry_code: str) -> bool:
        """Return True when a room currently uses the entry code."""
        response = execute(
            self.client.table("rooms")
            .select("id")
            .eq("entry_code", entry_code)
            .limit(1),
            "check room code",
        )
        return bool(response.data)

    def create_room(self, entry_code: str, participant: Participant) -> Room:
        """Insert a room row with a single participant."""
        response = execute(
            self.client.table("rooms").insert(
                {
                    "entry_code": entry_code,
                    "participants": [participant.to_payload()],
                }
            ),
            "create room",
            conflict_error=EntryCodeTakenError,
        )
        if not response.data:
            raise StoreError("Failed to create room")
        return _parse_room(response.data[0])

    def get_by_code(self, entry_code: str) -> Room | None:
        """Return the room using the entry code, if present."""
        response = execute(
            self.client.table("rooms")
            .select(_ROOM_COLUMNS)
            .eq("entry_code", entry_code)
            .limit(1),
            "get room",
        )
        if not response.data:
            return None
        return _parse_room(response.data[0])

    def get_by_id(self, room_id: UUID) -> Room | None:
        """Return a room by id, if present."""
        response = execute(
            self.client.table("rooms")
            .select(_ROOM_COLUMNS)
            .eq("id", str(room_id))
            .limit(1),
            "get room",
        )
        if not response.data:
            return None
        return _parse_room(response.data[0])

    def list_rooms(self) -> list[Room]:
        """Return every existing room."""
        response = execute(
            self.client.table("rooms").select(_ROOM_COLUMNS).order("created_at"),
            "list rooms",
        )
        return [_parse_room(row) for row in response.data or []]

    def add_participant(
        self, entry_code: str, participant: Participant
    ) -> Room | None:
        """Append a participant with set semantics via the join_room function."""
        response = execute(
            self.client.rpc(
                "join_room",
                {
                    "p_entry_code": entry_code,
                    "p_participant": participant.to_payload(),
                },
            ),
            "join room",
        )
        if not response.data:
            return None
        return self.get_by_code(entry_code) or _parse_room(_first_row(response.data))

    def remove_participant(
        self, entry_code: str, participant: Participant
    ) -> LeaveOutcome | None:
        """Remove a participant via the leave_room function."""
        response = execute(
            self.client.rpc(
                "leave_room",
                {
                    "p_entry_code": entry_code,
                    "p_participant": participant.to_payload(),
                },
            ),
            "leave room",
        )
        payload = response.data
        if not payload:
            return None
        if payload.get("deleted"):
            return RoomDeleted(entry_code=entry_code)
        room = self.get_by_code(entry_code) or _parse_room(payload["room"])
        return StillActive(room=room)


def _first_row(data: object) -> dict[str, object]:
    if isinstance(data, list):
        return data[0]
    return data  # type: ignore[return-value]


def _parse_room(row: dict[str, object]) -> Room:
    """Parse a room row into a domain model."""
    participants = row.get("participants") or []
    messages = row.get("messages") or []
    return Room(
        id=UUID(str(row["id"])),
        entry_code=str(row["entry_code"]),
        participants=tuple(parse_participant(item) for item in participants),
        message_ids=tuple(UUID(str(item["id"])) for item in messages),
    )
