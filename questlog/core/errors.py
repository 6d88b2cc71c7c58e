"""Domain exceptions raised by services and mapped to HTTP responses by the API layer."""

from fastapi import status


class QuestlogError(Exception):
    """Base error carrying a client-safe message and the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(QuestlogError):
    """Required input missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(QuestlogError):
    """A unique value (e.g. username) is already taken."""

    status_code = status.HTTP_409_CONFLICT


class InvalidCredentialsError(QuestlogError):
    """Unknown username or wrong password; the message never says which."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingTokenError(QuestlogError):
    status_code = status.HTTP_401_UNAUTHORIZED


class RevokedTokenError(QuestlogError):
    """Refresh token is not (or no longer) registered."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidTokenError(QuestlogError):
    """Bad signature, wrong algorithm, malformed or expired token."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(QuestlogError):
    """Row does not exist or is not owned by the caller."""

    status_code = status.HTTP_404_NOT_FOUND


class PasswordHashError(QuestlogError):
    """Stored password digest could not be parsed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
