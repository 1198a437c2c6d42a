"""
Error taxonomy shared by controllers, the message relay and both outer surfaces.

Every domain failure is a 'SocialError' subclass carrying a human-readable
'message', optional 'details' and the HTTP status the API layer maps it to.
The socket layer reuses 'message' and 'details' verbatim for its 'error'
event, so the two surfaces report the same failure the same way.
"""

from typing import Any


class SocialError(Exception):
    """Base class for expected, client-visible failures."""

    status_code: int = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload

    def to_event(self) -> dict[str, Any]:
        """Socket.IO form: the same failure as an 'error{message, details?}' event."""
        payload: dict[str, Any] = {"message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidArgumentError(SocialError):
    """A required field is missing or blank, or a value is not acceptable."""

    status_code = 400


class UnauthorizedError(SocialError):
    """Missing, malformed or expired credentials."""

    status_code = 401


class ForbiddenError(SocialError):
    """The actor does not own the resource it tries to change."""

    status_code = 403


class NotFoundError(SocialError):
    """A referenced entity does not exist."""

    status_code = 404


class InternalError(SocialError):
    status_code = 500
