"""Pydantic models for REST and socket payloads."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from doodle_mail.domain.messages import Message, MessageDraft
from doodle_mail.domain.participants import Participant
from doodle_mail.domain.rooms import Room
from doodle_mail.domain.users import UserProfile


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParticipantPayload(BaseModel):
    """Tagged participant identity."""

    kind: Literal["name", "user"] = "name"
    value: str

    @classmethod
    def from_domain(cls, participant: Participant) -> "ParticipantPayload":
        return cls.model_validate(participant.to_payload())


class ParticipantRequest(BaseModel):
    """Request body carrying the acting participant."""

    user: str | ParticipantPayload | None = None

    def participant(self) -> object:
        if isinstance(self.user, ParticipantPayload):
            return self.user.model_dump()
        return self.user


class MessageDraftPayload(CamelModel):
    """Message content as sent by clients."""

    title: str | None = None
    image_data: str | None = None
    background: str | None = None

    def to_domain(self) -> MessageDraft:
        return MessageDraft(
            title=self.title or "",
            image_data=self.image_data or "",
            background=self.background or "",
        )


class SendMessagesRequest(ParticipantRequest):
    """Request body for posting messages to a room."""

    messages: list[MessageDraftPayload] | None = None

    def drafts(self) -> list[MessageDraft] | None:
        if self.messages is None:
            return None
        return [message.to_domain() for message in self.messages]


class RoomPayload(CamelModel):
    """Room as returned to clients."""

    id: UUID
    entry_code: str
    participants: list[ParticipantPayload]
    messages: list[UUID] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, room: Room) -> "RoomPayload":
        return cls(
            id=room.id,
            entry_code=room.entry_code,
            participants=[
                ParticipantPayload.from_domain(item) for item in room.participants
            ],
            messages=list(room.message_ids),
        )


class MessagePayload(CamelModel):
    """Message as returned to clients."""

    id: UUID
    room: UUID
    author: ParticipantPayload
    title: str
    image_data: str
    background: str
    date: datetime

    @classmethod
    def from_domain(cls, message: Message) -> "MessagePayload":
        return cls(
            id=message.id,
            room=message.room_id,
            author=ParticipantPayload.from_domain(message.author),
            title=message.title,
            image_data=message.image_data,
            background=message.background,
            date=message.date,
        )


class UserPayload(BaseModel):
    """Public user profile."""

    id: UUID
    name: str
    email: str

    @classmethod
    def from_domain(cls, profile: UserProfile) -> "UserPayload":
        return cls(id=profile.id, name=profile.name, email=profile.email)


class RoomResponse(BaseModel):
    room: RoomPayload | None


class LeaveResponse(CamelModel):
    status: Literal["active", "deleted"]
    room: RoomPayload | None = None
    entry_code: str | None = None


class MessagesResponse(BaseModel):
    messages: list[MessagePayload]


class UserResponse(BaseModel):
    user: UserPayload
