"""REST endpoints for room messages and user profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, Response, status

from doodle_mail.api.models import (
    MessagePayload,
    MessagesResponse,
    ParticipantRequest,
    SendMessagesRequest,
    UserPayload,
    UserResponse,
)

if TYPE_CHECKING:
    from doodle_mail.containers import AppContainer

router = APIRouter(tags=["messages"])


@router.post("/rooms/{room_id}/messages", response_model=MessagesResponse)
async def room_messages(
    room_id: UUID, request: Request, body: ParticipantRequest | None = None
) -> MessagesResponse:
    """Return a room's messages; a supplied user must be a member."""
    container: AppContainer = request.app.state.container
    participant = body.participant() if body else None
    messages = container.message_service.get_room_messages(room_id, participant)
    return MessagesResponse(
        messages=[MessagePayload.from_domain(message) for message in messages]
    )


@router.post("/rooms/{room_id}/messages/send", response_model=MessagesResponse)
async def send_messages(
    room_id: UUID, body: SendMessagesRequest, request: Request
) -> MessagesResponse:
    """Post one or more messages and return the room's messages."""
    container: AppContainer = request.app.state.container
    messages = container.message_service.post_messages(
        body.participant(), room_id, body.drafts()
    )
    return MessagesResponse(
        messages=[MessagePayload.from_domain(message) for message in messages]
    )


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(message_id: UUID, request: Request) -> Response:
    """Delete a message by id."""
    container: AppContainer = request.app.state.container
    container.message_service.delete_message(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/users/{user_id}", response_model=UserResponse)
async def user_profile(user_id: UUID, request: Request) -> UserResponse:
    """Return a user's public profile."""
    container: AppContainer = request.app.state.container
    profile = container.user_service.get_profile(user_id)
    return UserResponse(user=UserPayload.from_domain(profile))
