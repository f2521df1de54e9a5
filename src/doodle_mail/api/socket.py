"""WebSocket channel that mirrors the REST room operations as events.

Clients send JSON frames shaped like::

    {"event": "rooms:join", "id": 7, "data": {"entryCode": "AbCd", "user": "jarl"}}

and receive one reply per frame carrying the same ``event`` and ``id`` with
``"status": "ok"`` plus the payload, or an ``error`` frame with
``"status": "error"`` and a short ``message``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from doodle_mail.api.models import MessageDraftPayload, MessagePayload, RoomPayload
from doodle_mail.domain.errors import DoodleMailError, InvalidInputError
from doodle_mail.domain.messages import Message
from doodle_mail.domain.rooms import Room, RoomDeleted

if TYPE_CHECKING:
    from doodle_mail.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter()

EventHandler = Callable[["AppContainer", dict[str, object]], dict[str, object]]


@router.websocket("/ws")
async def room_socket(websocket: WebSocket) -> None:
    """Serve room events over a single socket connection."""
    container: AppContainer = websocket.app.state.container
    await websocket.accept()
    await websocket.send_json({"event": "welcome"})
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            raw = message.get("text")
            if raw is None:
                reply = _error_frame(None, None, "Malformed frame")
            else:
                reply = handle_frame(container, raw)
            await websocket.send_json(reply)
    except WebSocketDisconnect:
        logger.info("Socket client disconnected")


def handle_frame(container: AppContainer, raw: str) -> dict[str, object]:
    """Dispatch one client frame and build the reply frame."""
    try:
        frame = json.loads(raw)
    except json.JSONDecodeError:
        return _error_frame(None, None, "Malformed frame")
    if not isinstance(frame, dict):
        return _error_frame(None, None, "Malformed frame")

    event = frame.get("event")
    frame_id = frame.get("id")
    handler = _HANDLERS.get(event) if isinstance(event, str) else None
    if handler is None:
        return _error_frame(event, frame_id, f"Unknown event: {event}")

    data = frame.get("data") or {}
    if not isinstance(data, dict):
        return _error_frame(event, frame_id, "Event data must be an object")

    logger.info("Socket event %s", event)
    try:
        payload = handler(container, data)
    except DoodleMailError as exc:
        return _error_frame(event, frame_id, exc.message)
    except Exception:
        logger.exception("Socket event %s failed", event)
        return _error_frame(event, frame_id, "Internal error")
    return {"event": event, "id": frame_id, "status": "ok", **payload}


def _room_info(container: AppContainer, data: dict[str, object]) -> dict[str, object]:
    code = _require_str(data, "entryCode", "Missing room code in request")
    room = container.room_service.get_room_info(code)
    return {"room": _dump_room(room) if room else None}


def _create_room(
    container: AppContainer, data: dict[str, object]
) -> dict[str, object]:
    room = container.room_service.create_room(data.get("user"))
    return {"room": _dump_room(room)}


def _join_room(container: AppContainer, data: dict[str, object]) -> dict[str, object]:
    room = container.room_service.join_room(
        data.get("user"), _optional_str(data, "entryCode")
    )
    return {"room": _dump_room(room)}


def _leave_room(
    container: AppContainer, data: dict[str, object]
) -> dict[str, object]:
    outcome = container.room_service.leave_room(
        data.get("user"), _optional_str(data, "entryCode")
    )
    if isinstance(outcome, RoomDeleted):
        return {"deleted": True, "room": None}
    return {"deleted": False, "room": _dump_room(outcome.room)}


def _room_messages(
    container: AppContainer, data: dict[str, object]
) -> dict[str, object]:
    room_id = _require_uuid(data, "roomId")
    messages = container.message_service.get_room_messages(room_id, data.get("user"))
    return {"messages": _dump_messages(messages)}


def _send_messages(
    container: AppContainer, data: dict[str, object]
) -> dict[str, object]:
    room_id = _require_uuid(data, "roomId")
    raw_messages = data.get("messages")
    if raw_messages is not None and not isinstance(raw_messages, list):
        raise InvalidInputError("Messages must be a list")
    try:
        drafts = [
            MessageDraftPayload.model_validate(item).to_domain()
            for item in raw_messages or []
        ]
    except ValidationError as exc:
        raise InvalidInputError("Malformed message") from exc
    messages = container.message_service.post_messages(
        data.get("user"), room_id, drafts
    )
    return {"messages": _dump_messages(messages)}


def _delete_message(
    container: AppContainer, data: dict[str, object]
) -> dict[str, object]:
    message_id = _require_uuid(data, "messageId")
    room_id = _require_uuid(data, "roomId")
    messages = container.message_service.delete_message_in_room(message_id, room_id)
    return {"messages": _dump_messages(messages)}


_HANDLERS: dict[str, EventHandler] = {
    "rooms:info": _room_info,
    "rooms:create": _create_room,
    "rooms:join": _join_room,
    "rooms:leave": _leave_room,
    "rooms:messages": _room_messages,
    "rooms:messages:send": _send_messages,
    "rooms:messages:delete": _delete_message,
}


def _error_frame(event: object, frame_id: object, message: str) -> dict[str, object]:
    return {
        "event": "error",
        "source": event,
        "id": frame_id,
        "status": "error",
        "message": message,
    }


def _dump_room(room: Room) -> dict[str, object]:
    return RoomPayload.from_domain(room).model_dump(mode="json", by_alias=True)


def _dump_messages(messages: list[Message]) -> list[dict[str, object]]:
    return [
        MessagePayload.from_domain(message).model_dump(mode="json", by_alias=True)
        for message in messages
    ]


def _optional_str(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _require_str(data: dict[str, object], key: str, message: str) -> str:
    value = _optional_str(data, key)
    if not value:
        raise InvalidInputError(message)
    return value


def _require_uuid(data: dict[str, object], key: str) -> UUID:
    value = data.get(key)
    if value is None:
        raise InvalidInputError(f"Missing {key}")
    try:
        return UUID(str(value))
    except ValueError as exc:
        raise InvalidInputError(f"Invalid {key}") from exc
