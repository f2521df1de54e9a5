"""Error taxonomy shared by services, adapters and transports."""


class DoodleMailError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    public_message: str | None = None

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message or self.__class__.__name__)

    @property
    def message(self) -> str:
        return self.public_message or str(self)


class InvalidInputError(DoodleMailError):
    """A required field is missing or blank."""

    status_code = 400


class NotFoundError(DoodleMailError):
    """The referenced room or message does not exist."""

    status_code = 404


class DuplicateParticipantError(DoodleMailError):
    """The participant is already a member of the room."""

    status_code = 409
    public_message = "Someone with same name is already in room."


class UnauthorizedError(DoodleMailError):
    """The participant is not a member of the room."""

    status_code = 403


class CodeExhaustionError(DoodleMailError):
    """No free entry code was found within the retry budget."""

    status_code = 503
    public_message = "Failed to create new room"


class StoreError(DoodleMailError):
    """The backing store failed; details are logged, not returned."""

    status_code = 500
    public_message = "Internal storage error"


class EntryCodeTakenError(StoreError):
    """The store rejected a room insert because its entry code is in use."""
