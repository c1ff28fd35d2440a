"""Application error taxonomy.

Services raise these; the HTTP layer turns them into ``{"error": message}``
responses with the matching status code.
"""

from http import HTTPStatus


class FoodLogError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = int(HTTPStatus.INTERNAL_SERVER_ERROR)

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FoodLogError):
    """Malformed or missing input."""

    status_code = int(HTTPStatus.BAD_REQUEST)


class AuthError(FoodLogError):
    """Bad credentials or a missing, invalid or expired token."""

    status_code = int(HTTPStatus.UNAUTHORIZED)


class NotFoundError(FoodLogError):
    """A required record no longer exists."""

    status_code = int(HTTPStatus.NOT_FOUND)


class ConflictError(FoodLogError):
    """A unique key is already taken."""

    status_code = int(HTTPStatus.CONFLICT)


class ConfigError(FoodLogError):
    """Required external configuration is missing."""


class UpstreamError(FoodLogError):
    """A third-party service failed."""

    def __init__(self, message: str, upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


class InternalError(FoodLogError):
    """Unexpected store failure."""
