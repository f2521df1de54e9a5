"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from doodle_mail.adapters.supabase_message_repository import (
    SupabaseMessageRepository,
)
from doodle_mail.adapters.supabase_room_repository import SupabaseRoomRepository
from doodle_mail.adapters.supabase_user_repository import SupabaseUserRepository
from doodle_mail.config import Settings
from doodle_mail.services.codes import RoomCodeGenerator
from doodle_mail.services.messages import MessageService
from doodle_mail.services.rooms import RoomService
from doodle_mail.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    room_service: RoomService
    message_service: MessageService
    user_service: UserService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    room_repository = SupabaseRoomRepository(supabase_client)
    message_repository = SupabaseMessageRepository(supabase_client)
    user_repository = SupabaseUserRepository(supabase_client)
    code_generator = RoomCodeGenerator(
        lookup=room_repository,
        length=resolved_settings.room_code_length,
        max_attempts=resolved_settings.room_code_max_attempts,
    )
    room_service = RoomService(
        repository=room_repository,
        code_generator=code_generator,
    )
    message_service = MessageService(
        repository=message_repository,
        room_repository=room_repository,
    )
    user_service = UserService(user_repository)

    async def close_resources() -> None:
        supabase_client.postgrest.session.close()

    return AppContainer(
        settings=resolved_settings,
        room_service=room_service,
        message_service=message_service,
        user_service=user_service,
        close_resources=close_resources,
    )
