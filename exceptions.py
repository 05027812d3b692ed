"""
Custom exceptions for the Discord notification client

Every failed delivery surfaces as a CouldNotSendNotification. The subclasses
tell callers which of the three failure kinds occurred, so they can catch a
single kind or the whole family.
"""
from enum import Enum
from typing import Any, Optional, Union


class NotifierException(Exception):
    """Base exception for all notifier errors."""
    pass


class ConfigurationException(NotifierException):
    """Exception for configuration-related errors."""
    pass


class ErrorKind(str, Enum):
    """Failure categories for a Discord API call."""
    HTTP_ERROR = "http_error"
    COMMUNICATION_ERROR = "communication_error"
    API_ERROR = "api_error"


def _with_discord_message(prefix: str, body: Any) -> str:
    """Append Discord's human readable `message` from an error body, if any."""
    message = body.get("message") if isinstance(body, dict) else None
    if message:
        return f"{prefix}: {message}"
    return prefix


class CouldNotSendNotification(NotifierException):
    """Raised when a request to the Discord API fails."""

    kind: ErrorKind

    @classmethod
    def service_responded_with_an_http_error(
        cls,
        response: Any,
        status_code: int,
        cause: Optional[BaseException] = None,
        body: Optional[Union[dict, list]] = None
    ) -> "DiscordHTTPError":
        """Build the error for a non-2xx response."""
        error = DiscordHTTPError(response, status_code, body)
        error.__cause__ = cause
        return error

    @classmethod
    def service_communication_error(cls, cause: BaseException) -> "DiscordCommunicationError":
        """Build the error for a failure with no usable response."""
        error = DiscordCommunicationError(cause)
        error.__cause__ = cause
        return error

    @classmethod
    def service_responded_with_an_api_error(cls, body: dict, code: Union[int, float]) -> "DiscordAPIError":
        """Build the error for a 2xx response carrying a Discord error code."""
        return DiscordAPIError(body, code)


class DiscordHTTPError(CouldNotSendNotification):
    """Discord answered with a non-2xx status."""

    kind = ErrorKind.HTTP_ERROR

    def __init__(self, response: Any, status_code: int, body: Optional[Union[dict, list]] = None):
        self.response = response
        self.status_code = status_code
        self.body = body
        super().__init__(
            _with_discord_message(f"Discord responded with an HTTP error: {status_code}", body)
        )


class DiscordCommunicationError(CouldNotSendNotification):
    """The request never produced a response (network, DNS, timeout, bad body)."""

    kind = ErrorKind.COMMUNICATION_ERROR

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Communication with Discord failed: {cause}")


class DiscordAPIError(CouldNotSendNotification):
    """Discord accepted the request but reported an error code in the body."""

    kind = ErrorKind.API_ERROR

    def __init__(self, body: dict, code: Union[int, float]):
        self.body = body
        self.code = code
        super().__init__(
            _with_discord_message(f"Discord responded with an API error: {code}", body)
        )
