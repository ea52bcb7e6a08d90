"""
Custom exceptions for ledger and boundary data acquisition.

This module defines a hierarchy of exceptions for the error conditions
that abort an ingestion run: a missing or malformed ledger, and failures
while talking to the boundary service.
"""

from typing import Optional


class AcquisitionError(Exception):
    """Base exception for all acquisition-related errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        """
        Initialize the acquisition error.

        Args:
            message: Human-readable error description.
            cause: The underlying exception that caused this error, if any.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class LedgerNotFoundError(AcquisitionError):
    """Raised when the availability ledger file does not exist."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class LedgerReadError(AcquisitionError):
    """Raised when the ledger exists but cannot be read as UTF-8 text."""

    def __init__(
        self, message: str, path: str, cause: Optional[Exception] = None
    ) -> None:
        super().__init__(message, cause)
        self.path = path


class MalformedLedgerEntryError(AcquisitionError):
    """Raised in strict mode for a ledger line that cannot be recorded."""

    def __init__(self, message: str, line_number: int, line: str) -> None:
        """
        Initialize the malformed entry error.

        Args:
            message: Human-readable error description.
            line_number: 1-based line number within the ledger.
            line: The offending line, stripped.
        """
        super().__init__(f"{message} at line {line_number}: {line!r}")
        self.line_number = line_number
        self.line = line


class ConnectionError(AcquisitionError):
    """Raised when unable to establish connection to the boundary service."""

    pass


class TimeoutError(AcquisitionError):
    """Raised when a request times out."""

    def __init__(
        self,
        message: str,
        timeout_type: str = "unknown",
        cause: Optional[Exception] = None,
    ) -> None:
        """
        Initialize the timeout error.

        Args:
            message: Human-readable error description.
            timeout_type: Type of timeout (connect, read, write, pool).
            cause: The underlying exception that caused this error.
        """
        super().__init__(message, cause)
        self.timeout_type = timeout_type


class ServiceStatusError(AcquisitionError):
    """Raised when the boundary service answers with a non-success status."""

    BODY_PREVIEW_CHARS = 200

    def __init__(
        self,
        message: str,
        status_code: int,
        response_text: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """
        Initialize the status error.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code returned by the service.
            response_text: Raw response body, truncated for diagnostics.
            cause: The underlying exception that caused this error.
        """
        self.status_code = status_code
        self.response_text = (
            response_text[: self.BODY_PREVIEW_CHARS] if response_text else None
        )
        if self.response_text:
            message = f"{message}\n{self.response_text}"
        super().__init__(message, cause)


class ServerError(ServiceStatusError):
    """Raised when the boundary service returns a 5xx error."""

    pass


class NotFoundError(ServiceStatusError):
    """Raised when the requested layer is not found (404)."""

    def __init__(
        self,
        message: str,
        url: str,
        response_text: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, 404, response_text, cause)
        self.url = url


class InvalidResponseError(AcquisitionError):
    """Raised when the service returns an unparseable or unexpected body."""

    def __init__(
        self,
        message: str,
        response_text: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """
        Initialize the invalid response error.

        Args:
            message: Human-readable error description.
            response_text: The raw response text that couldn't be used.
            cause: The underlying exception that caused this error.
        """
        super().__init__(message, cause)
        self.response_text = response_text[:500] if response_text else None
