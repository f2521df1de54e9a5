"""Entry code generation for rooms."""

import logging
import secrets
import string
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from doodle_mail.domain.errors import CodeExhaustionError

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_letters + string.digits
DEFAULT_CODE_LENGTH = 4
DEFAULT_MAX_ATTEMPTS = 6


class CodeLookup(Protocol):
    """Read access needed to detect entry code collisions."""

    def code_exists(self, entry_code: str) -> bool:
        """Return True when a room currently uses the entry code."""


@dataclass
class RoomCodeGenerator:
    """Draws short entry codes that no existing room is using."""

    lookup: CodeLookup
    length: int = DEFAULT_CODE_LENGTH
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    choice: Callable[[Sequence[str]], str] = secrets.choice

    def draw(self) -> str:
        """Return a random code without checking the store."""
        return "".join(self.choice(CODE_ALPHABET) for _ in range(self.length))

    def generate(self, attempts_used: int = 0) -> tuple[str, int]:
        """Return a free code and the number of attempts consumed so far.

        ``attempts_used`` lets callers that retry after a rejected insert
        share one budget with the collision checks.
        """
        attempts = attempts_used
        while attempts < self.max_attempts:
            code = self.draw()
            attempts += 1
            if not self.lookup.code_exists(code):
                return code, attempts
            logger.info("Room code %s was taken, generating another", code)
        raise CodeExhaustionError(
            f"No free room code after {self.max_attempts} attempts"
        )
