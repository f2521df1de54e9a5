"""REST endpoints for room membership."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from doodle_mail.api.models import (
    LeaveResponse,
    ParticipantRequest,
    RoomPayload,
    RoomResponse,
)
from doodle_mail.domain.rooms import RoomDeleted

if TYPE_CHECKING:
    from doodle_mail.containers import AppContainer

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.post("/create", response_model=RoomResponse)
async def create_room(body: ParticipantRequest, request: Request) -> RoomResponse:
    """Create a room with a fresh entry code for the requesting user."""
    container: AppContainer = request.app.state.container
    room = container.room_service.create_room(body.participant())
    return RoomResponse(room=RoomPayload.from_domain(room))


@router.get("/{entry_code}/info", response_model=RoomResponse)
async def room_info(entry_code: str, request: Request) -> RoomResponse:
    """Return a room by its entry code."""
    container: AppContainer = request.app.state.container
    room = container.room_service.get_room_info(entry_code)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Room does not exist."
        )
    return RoomResponse(room=RoomPayload.from_domain(room))


@router.post("/{entry_code}/join", response_model=RoomResponse)
async def join_room(
    entry_code: str, body: ParticipantRequest, request: Request
) -> RoomResponse:
    """Add the requesting user to a room."""
    container: AppContainer = request.app.state.container
    room = container.room_service.join_room(body.participant(), entry_code)
    return RoomResponse(room=RoomPayload.from_domain(room))


@router.post("/{entry_code}/leave", response_model=LeaveResponse)
async def leave_room(
    entry_code: str, body: ParticipantRequest, request: Request
) -> LeaveResponse:
    """Remove the requesting user; the room is deleted once empty."""
    container: AppContainer = request.app.state.container
    outcome = container.room_service.leave_room(body.participant(), entry_code)
    if isinstance(outcome, RoomDeleted):
        return LeaveResponse(status="deleted", entry_code=outcome.entry_code)
    return LeaveResponse(
        status="active",
        room=RoomPayload.from_domain(outcome.room),
        entry_code=outcome.room.entry_code,
    )
