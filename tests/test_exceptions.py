"""
Tests for custom exceptions

Ensures exception hierarchy, factories and messages work correctly.
"""
import pytest
from unittest.mock import MagicMock

from exceptions import (
    NotifierException,
    ConfigurationException,
    CouldNotSendNotification,
    DiscordHTTPError,
    DiscordCommunicationError,
    DiscordAPIError,
    ErrorKind
)


class TestExceptionHierarchy:
    """Test that exceptions inherit correctly."""

    def test_all_exceptions_inherit_from_notifier_exception(self):
        """Test that all custom exceptions inherit from NotifierException."""
        assert issubclass(ConfigurationException, NotifierException)
        assert issubclass(CouldNotSendNotification, NotifierException)
        assert issubclass(NotifierException, Exception)

    def test_failure_kinds_share_could_not_send(self):
        """Test that each failure kind is a CouldNotSendNotification."""
        for exc_class in (DiscordHTTPError, DiscordCommunicationError, DiscordAPIError):
            assert issubclass(exc_class, CouldNotSendNotification)

    def test_each_class_has_distinct_kind(self):
        assert DiscordHTTPError.kind is ErrorKind.HTTP_ERROR
        assert DiscordCommunicationError.kind is ErrorKind.COMMUNICATION_ERROR
        assert DiscordAPIError.kind is ErrorKind.API_ERROR


class TestFactories:
    """Test the CouldNotSendNotification factory methods."""

    def test_http_error_factory(self):
        """Test HTTP error carries response, status and cause."""
        response = MagicMock()
        cause = RuntimeError("403 Forbidden")

        error = CouldNotSendNotification.service_responded_with_an_http_error(
            response, 403, cause, {"message": "Missing Permissions", "code": 50013}
        )

        assert isinstance(error, DiscordHTTPError)
        assert error.response is response
        assert error.status_code == 403
        assert error.__cause__ is cause
        assert str(error) == "Discord responded with an HTTP error: 403: Missing Permissions"

    def test_http_error_without_body(self):
        error = CouldNotSendNotification.service_responded_with_an_http_error(MagicMock(), 500)

        assert error.body is None
        assert str(error) == "Discord responded with an HTTP error: 500"

    def test_api_error_without_message_has_no_trailing_separator(self):
        error = CouldNotSendNotification.service_responded_with_an_api_error({"code": 40001}, 40001)

        assert str(error) == "Discord responded with an API error: 40001"

    def test_communication_error_factory(self):
        """Test communication error wraps the original cause."""
        cause = ConnectionError("Network unreachable")

        error = CouldNotSendNotification.service_communication_error(cause)

        assert isinstance(error, DiscordCommunicationError)
        assert error.cause is cause
        assert error.__cause__ is cause
        assert str(error) == "Communication with Discord failed: Network unreachable"

    def test_api_error_factory(self):
        """Test API error carries body and code."""
        body = {"code": 50035, "message": "Invalid Form Body"}

        error = CouldNotSendNotification.service_responded_with_an_api_error(body, 50035)

        assert isinstance(error, DiscordAPIError)
        assert error.body is body
        assert error.code == 50035
        assert str(error) == "Discord responded with an API error: 50035: Invalid Form Body"

    def test_factories_can_be_raised_and_caught_by_base(self):
        with pytest.raises(CouldNotSendNotification):
            raise CouldNotSendNotification.service_responded_with_an_api_error({"code": 1}, 1)

        with pytest.raises(NotifierException):
            raise CouldNotSendNotification.service_communication_error(OSError("boom"))
