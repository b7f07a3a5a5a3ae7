"""
Exception hierarchy for jikanio.

Every error raised by the client carries a category, a severity, structured
details and troubleshooting hints, so callers and the CLI can report failures
without inspecting the message text.
"""

import time
from enum import Enum
from typing import Any

from .logging import get_logger

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Categories for error classification."""

    USER_ERROR = "user_error"
    NETWORK_ERROR = "network_error"
    API_ERROR = "api_error"
    DATA_ERROR = "data_error"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class JikanError(Exception):
    """
    Base exception for all jikanio errors.

    Provides error context, categorization, and troubleshooting guidance.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        category: ErrorCategory = ErrorCategory.DATA_ERROR,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        troubleshooting_hints: list[str] | None = None,
        **context: Any,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.category = category
        self.severity = severity
        self.troubleshooting_hints = troubleshooting_hints or []
        self.context = context
        self.timestamp = time.time()

        logger.debug(
            f"Exception created: {self.__class__.__name__}",
            error=self.message,
            category=self.category.value,
            severity=self.severity.value,
            **self.details,
            **self.context,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp,
            "details": self.details,
            "troubleshooting_hints": self.troubleshooting_hints,
            "context": self.context,
        }


class ValidationError(JikanError):
    """Raised before any request is sent when call arguments are invalid."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        field_value: Any | None = None,
        validation_rule: str | None = None,
        **kwargs,
    ):
        details = kwargs.setdefault("details", {})
        details.update(
            {
                "field_name": field_name,
                "field_value": field_value,
                "validation_rule": validation_rule,
            }
        )
        self.field_name = field_name
        self.field_value = field_value
        self.validation_rule = validation_rule

        hints = [
            "Check the arguments passed to the resource method",
            "Resource IDs and page numbers must be positive integers",
        ]
        if field_name:
            hints.append(f"Check the value provided for '{field_name}'")

        kwargs.setdefault("troubleshooting_hints", hints)
        super().__init__(
            message,
            category=ErrorCategory.USER_ERROR,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


class SearchQueryError(ValidationError):
    """Raised when a search query is too short for MyAnimeList to process."""

    def __init__(self, query: str, min_length: int, **kwargs):
        self.min_length = min_length
        super().__init__(
            f"MyAnimeList only processes queries with a minimum of {min_length} letters",
            field_name="q",
            field_value=query,
            validation_rule=f"len >= {min_length}",
            troubleshooting_hints=[
                f"Use a search term of at least {min_length} characters",
                "Omit 'q' entirely to search by the other filters only",
            ],
            **kwargs,
        )


class TransportFailure(JikanError):
    """The API answered with a status other than 200."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response: Any = None,
        url: str | None = None,
        **kwargs,
    ):
        details = kwargs.setdefault("details", {})
        details.update({"status_code": status_code, "url": url})
        self.status_code = status_code
        self.response = response
        self.url = url

        super().__init__(
            message,
            category=ErrorCategory.API_ERROR,
            severity=self._determine_severity(status_code),
            troubleshooting_hints=self._generate_troubleshooting_hints(status_code),
            **kwargs,
        )

    @staticmethod
    def _determine_severity(status_code: int) -> ErrorSeverity:
        """Determine error severity based on status code."""
        if status_code >= 500:
            return ErrorSeverity.HIGH
        elif status_code >= 400:
            return ErrorSeverity.LOW
        else:
            return ErrorSeverity.MEDIUM

    @staticmethod
    def _generate_troubleshooting_hints(status_code: int) -> list[str]:
        """Generate troubleshooting hints based on status code."""
        if status_code == 404:
            return [
                "The requested resource was not found",
                "Verify the resource ID exists on MyAnimeList",
            ]
        elif status_code == 429:
            return [
                "The Jikan rate limit was exceeded",
                "Wait a few seconds before issuing more requests",
            ]
        elif status_code >= 500:
            return [
                "Jikan or MyAnimeList is experiencing server issues",
                "Check https://status.jikan.moe if available",
            ]
        return ["Inspect the response body for the API error message"]


class DecodeError(JikanError):
    """The API answered 200 but the body is not valid JSON."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        body_excerpt: str | None = None,
        **kwargs,
    ):
        details = kwargs.setdefault("details", {})
        details.update({"url": url, "body_excerpt": body_excerpt})
        self.url = url
        self.body_excerpt = body_excerpt

        super().__init__(
            message,
            category=ErrorCategory.DATA_ERROR,
            severity=ErrorSeverity.HIGH,
            troubleshooting_hints=[
                "The server reported success but sent a malformed body",
                "Check whether a proxy or captive portal rewrote the response",
            ],
            **kwargs,
        )


class NetworkError(JikanError):
    """No HTTP response was received at all."""

    def __init__(self, message: str, url: str | None = None, **kwargs):
        details = kwargs.setdefault("details", {})
        details.update({"url": url})
        self.url = url

        super().__init__(
            message,
            category=ErrorCategory.NETWORK_ERROR,
            severity=ErrorSeverity.MEDIUM,
            troubleshooting_hints=[
                "Check your internet connection",
                "Try increasing JIKANIO_HTTP_TIMEOUT if the service is slow",
                "Check firewall and proxy settings",
            ],
            **kwargs,
        )
