"""Shared test fixtures."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from doodle_mail.config import Settings
from doodle_mail.containers import AppContainer
from doodle_mail.domain.errors import EntryCodeTakenError, StoreError
from doodle_mail.domain.messages import Message, MessageDraft
from doodle_mail.domain.participants import DisplayName, Participant
from doodle_mail.domain.rooms import LeaveOutcome, Room, RoomDeleted, StillActive
from doodle_mail.domain.users import UserProfile
from doodle_mail.services.codes import RoomCodeGenerator
from doodle_mail.services.messages import MessageRepository, MessageService
from doodle_mail.services.rooms import RoomRepository, RoomService
from doodle_mail.services.users import UserRepository, UserService


@dataclass
class InMemoryMessageRepository(MessageRepository):
    """In-memory message repository for tests."""

    messages: dict[UUID, Message] = field(default_factory=dict)

    def create_message(
        self,
        room_id: UUID,
        author: Participant,
        draft: MessageDraft,
        posted_at: datetime,
    ) -> Message:
        message = Message(
            id=uuid4(),
            room_id=room_id,
            author=author,
            title=draft.title,
            image_data=draft.image_data,
            background=draft.background,
            date=posted_at,
        )
        self.messages[message.id] = message
        return message

    def list_for_room(self, room_id: UUID) -> list[Message]:
        return sorted(
            (item for item in self.messages.values() if item.room_id == room_id),
            key=lambda item: item.date,
        )

    def delete_message(self, message_id: UUID) -> bool:
        return self.messages.pop(message_id, None) is not None

    def delete_for_room(self, room_id: UUID) -> None:
        for message_id in [
            item.id for item in self.messages.values() if item.room_id == room_id
        ]:
            del self.messages[message_id]


@dataclass
class InMemoryRoomRepository(RoomRepository):
    """In-memory room repository enforcing unique codes and set membership."""

    message_repository: InMemoryMessageRepository = field(
        default_factory=InMemoryMessageRepository
    )
    rooms: dict[UUID, Room] = field(default_factory=dict)
    claimed_on_insert: set[str] = field(default_factory=set)
    lookups: list[str] = field(default_factory=list)

    def code_exists(self, entry_code: str) -> bool:
        self.lookups.append(entry_code)
        return self._find(entry_code) is not None

    def create_room(self, entry_code: str, participant: Participant) -> Room:
        if entry_code in self.claimed_on_insert or self._find(entry_code):
            self.claimed_on_insert.discard(entry_code)
            raise EntryCodeTakenError(f"Room code {entry_code} already exists")
        room = Room(id=uuid4(), entry_code=entry_code, participants=(participant,))
        self.rooms[room.id] = room
        return room

    def get_by_code(self, entry_code: str) -> Room | None:
        room = self._find(entry_code)
        return self._with_messages(room) if room else None

    def get_by_id(self, room_id: UUID) -> Room | None:
        room = self.rooms.get(room_id)
        return self._with_messages(room) if room else None

    def list_rooms(self) -> list[Room]:
        return [self._with_messages(room) for room in self.rooms.values()]

    def add_participant(
        self, entry_code: str, participant: Participant
    ) -> Room | None:
        room = self._find(entry_code)
        if room is None or participant in room.participants:
            return None
        updated = replace(room, participants=(*room.participants, participant))
        self.rooms[room.id] = updated
        return self._with_messages(updated)

    def remove_participant(
        self, entry_code: str, participant: Participant
    ) -> LeaveOutcome | None:
        room = self._find(entry_code)
        if room is None:
            return None
        remaining = tuple(item for item in room.participants if item != participant)
        if not remaining:
            del self.rooms[room.id]
            self.message_repository.delete_for_room(room.id)
            return RoomDeleted(entry_code=entry_code)
        updated = replace(room, participants=remaining)
        self.rooms[room.id] = updated
        return StillActive(room=self._with_messages(updated))

    def _find(self, entry_code: str) -> Room | None:
        for room in self.rooms.values():
            if room.entry_code == entry_code:
                return room
        return None

    def _with_messages(self, room: Room) -> Room:
        message_ids = tuple(
            item.id for item in self.message_repository.list_for_room(room.id)
        )
        return replace(room, message_ids=message_ids)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.users.get(user_id)


@dataclass
class FailingRoomRepository(InMemoryRoomRepository):
    """Room repository whose reads fail the way a broken store does."""

    detail: str = "secret detail"

    def get_by_code(self, entry_code: str) -> Room | None:
        raise StoreError(self.detail)

    def get_by_id(self, room_id: UUID) -> Room | None:
        raise StoreError(self.detail)


@dataclass
class FakeResponse:
    data: object


@dataclass
class FakeQuery:
    name: str
    response_queue: dict[str, list[object]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "delete": [],
            "rpc": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    error: Exception | None = None

    def queue(self, action: str, data: object) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeQuery":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeQuery":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeQuery":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeQuery":
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeQuery] = field(default_factory=dict)
    functions: dict[str, FakeQuery] = field(default_factory=dict)
    rpc_calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    def table(self, name: str) -> FakeQuery:
        if name not in self.tables:
            self.tables[name] = FakeQuery(name=name)
        return self.tables[name]

    def function(self, name: str) -> FakeQuery:
        if name not in self.functions:
            self.functions[name] = FakeQuery(name=name)
        return self.functions[name]

    def rpc(self, name: str, params: dict[str, object]) -> FakeQuery:
        self.rpc_calls.append((name, params))
        query = self.function(name)
        query._action = "rpc"
        return query


@dataclass
class ScriptedChoice:
    """Replays whole codes one character at a time, then repeats the last."""

    codes: Sequence[str]
    _chars: Iterator[str] | None = None
    _index: int = 0

    def __call__(self, alphabet: Sequence[str]) -> str:
        if self._chars is None:
            code = self.codes[min(self._index, len(self.codes) - 1)]
            self._index += 1
            self._chars = iter(code)
        char = next(self._chars, None)
        if char is None:
            self._chars = None
            return self(alphabet)
        return char


def build_room_service(
    repository: InMemoryRoomRepository,
    codes: Sequence[str] | None = None,
    max_attempts: int = 6,
) -> RoomService:
    """Create a room service, optionally with scripted entry codes."""
    generator = RoomCodeGenerator(lookup=repository, max_attempts=max_attempts)
    if codes is not None:
        generator.choice = ScriptedChoice(codes)
    return RoomService(repository=repository, code_generator=generator)


def seed_room(
    repository: InMemoryRoomRepository,
    entry_code: str = "ABCD",
    participants: Sequence[Participant] = (
        DisplayName("Jim Test"),
        DisplayName("Bob Test"),
    ),
    message_count: int = 2,
) -> Room:
    """Insert a room with members and messages, like the API fixtures."""
    room = Room(id=uuid4(), entry_code=entry_code, participants=tuple(participants))
    repository.rooms[room.id] = room
    base = datetime(2024, 1, 1, tzinfo=UTC)
    for index in range(message_count):
        repository.message_repository.create_message(
            room.id,
            room.participants[0],
            MessageDraft(
                title=f"Test Message {index + 1}",
                image_data="testimagedata",
                background="white",
            ),
            base + timedelta(minutes=index),
        )
    return repository.get_by_id(room.id)  # type: ignore[return-value]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
            ".eyJyb2xlIjoic2VydmljZV9yb2xlIn0"
            ".c2lnbmF0dXJl"
        ),
        admin_token="admin-token",
    )


@pytest.fixture
def message_repository() -> InMemoryMessageRepository:
    return InMemoryMessageRepository()


@pytest.fixture
def room_repository(
    message_repository: InMemoryMessageRepository,
) -> InMemoryRoomRepository:
    return InMemoryRoomRepository(message_repository=message_repository)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def seeded_room(room_repository: InMemoryRoomRepository) -> Room:
    return seed_room(room_repository)


@pytest.fixture
def container(
    settings: Settings,
    room_repository: InMemoryRoomRepository,
    message_repository: InMemoryMessageRepository,
    user_repository: InMemoryUserRepository,
) -> AppContainer:
    room_service = build_room_service(room_repository)
    message_service = MessageService(
        repository=message_repository,
        room_repository=room_repository,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        room_service=room_service,
        message_service=message_service,
        user_service=UserService(user_repository),
        close_resources=close_resources,
    )
