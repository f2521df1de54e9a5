"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from doodle_mail.api.models import RoomPayload

if TYPE_CHECKING:
    from doodle_mail.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/rooms", dependencies=[Depends(require_admin)])
async def list_rooms(request: Request) -> dict[str, object]:
    """Return every existing room."""
    container: AppContainer = request.app.state.container
    rooms = container.room_service.list_rooms()
    return {
        "rooms": [
            RoomPayload.from_domain(room).model_dump(mode="json", by_alias=True)
            for room in rooms
        ]
    }
