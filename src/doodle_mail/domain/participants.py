"""Participant identities for room membership."""

from dataclasses import dataclass
from uuid import UUID

from doodle_mail.domain.errors import InvalidInputError

NAME_KIND = "name"
USER_KIND = "user"


@dataclass(frozen=True)
class DisplayName:
    """A participant known only by the name they typed in."""

    name: str

    def to_payload(self) -> dict[str, str]:
        return {"kind": NAME_KIND, "value": self.name}

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class UserRef:
    """A participant backed by a registered user record."""

    user_id: UUID

    def to_payload(self) -> dict[str, str]:
        return {"kind": USER_KIND, "value": str(self.user_id)}

    def __str__(self) -> str:
        return f"user:{self.user_id}"


Participant = DisplayName | UserRef


def parse_participant(raw: object) -> Participant:
    """Build a participant from a bare name or a ``{kind, value}`` payload.

    Raises ``InvalidInputError`` when the identity is missing or malformed.
    """
    if isinstance(raw, DisplayName | UserRef):
        return raw
    if isinstance(raw, str):
        return _display_name(raw)
    if isinstance(raw, dict):
        kind = raw.get("kind", NAME_KIND)
        value = raw.get("value")
        if kind == NAME_KIND and isinstance(value, str):
            return _display_name(value)
        if kind == USER_KIND and value is not None:
            try:
                return UserRef(user_id=UUID(str(value)))
            except ValueError as exc:
                raise InvalidInputError(f"Invalid user id: {value}") from exc
    raise InvalidInputError("Missing participant identity")


def _display_name(value: str) -> DisplayName:
    cleaned = value.strip()
    if not cleaned:
        raise InvalidInputError("Missing participant identity")
    return DisplayName(name=cleaned)
