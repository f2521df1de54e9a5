"""Helpers for running PostgREST queries through the Supabase client."""

import logging
from typing import Any, Protocol

import httpx
from postgrest.exceptions import APIError

from doodle_mail.domain.errors import StoreError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class Executable(Protocol):
    """Anything with a PostgREST-style ``execute``."""

    def execute(self) -> Any:
        """Run the query and return the response."""


def execute(
    query: Executable,
    action: str,
    conflict_error: type[StoreError] = StoreError,
) -> Any:
    """Run a query, translating PostgREST and transport failures into store errors.

    Unique constraint violations raise ``conflict_error`` so callers can
    react to them; anything else is logged and raised as ``StoreError``.
    """
    try:
        return query.execute()
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION and conflict_error is not StoreError:
            raise conflict_error(f"Failed to {action}: already exists") from exc
        logger.exception("Supabase query failed: %s", action)
        raise StoreError(f"Failed to {action}") from exc
    except httpx.HTTPError as exc:
        logger.exception("Supabase request failed: %s", action)
        raise StoreError(f"Failed to {action}") from exc
