"""Domain models for room messages."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from doodle_mail.domain.participants import Participant


@dataclass(frozen=True)
class MessageDraft:
    """Content of a message before it is stored."""

    title: str
    image_data: str
    background: str


@dataclass(frozen=True)
class Message:
    """A picture message posted to a room."""

    id: UUID
    room_id: UUID
    author: Participant
    title: str
    image_data: str
    background: str
    date: datetime
