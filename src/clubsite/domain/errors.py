"""Error taxonomy shared by services, adapters and the API layer."""


class ClubError(Exception):
    """Base class for expected, user-facing failures."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(ClubError):
    """Malformed or missing input."""

    default_message = "Invalid input"


class AuthError(ClubError):
    """The operation needs an authenticated actor and none is present."""

    default_message = "You must be logged in"


class AuthorizationError(ClubError):
    """The actor is authenticated but lacks ownership or role."""

    default_message = "You are not allowed to do that"


class NotFoundError(ClubError):
    """A referenced entity does not exist."""

    default_message = "Not found"


class StorageError(ClubError):
    """Object store read or write failure."""

    default_message = "File storage failed"


class RepositoryError(ClubError):
    """Relational store operation failure."""

    default_message = "Database operation failed"
