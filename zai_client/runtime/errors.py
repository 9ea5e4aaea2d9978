"""
Error model for the inference API client.

Every failure surfaced by the client is a ZaiError. The ``kind`` attribute
identifies which member of the closed error taxonomy applies, so callers can
branch on the failure without matching on the message text.
"""

from __future__ import annotations

import json
import uuid
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of error kinds."""

    # Client-side
    GENERIC = "generic"
    CONFIGURATION = "configuration"
    DECODE = "decode"
    STREAM_DECODE = "stream_decode"

    # Transport
    TIMEOUT = "timeout"

    # Classified HTTP statuses
    BAD_REQUEST = "bad_request"
    AUTHENTICATION = "authentication"
    RATE_LIMITED = "rate_limited"
    INTERNAL_SERVER = "internal_server"
    OVERLOADED = "overloaded"
    STATUS = "status"


# Kinds that will fail the same way on every attempt
NON_RETRYABLE_KINDS = frozenset(
    {
        ErrorKind.AUTHENTICATION,
        ErrorKind.BAD_REQUEST,
        ErrorKind.CONFIGURATION,
        ErrorKind.DECODE,
        ErrorKind.STREAM_DECODE,
    }
)

_STATUS_KINDS = {
    400: ErrorKind.BAD_REQUEST,
    401: ErrorKind.AUTHENTICATION,
    429: ErrorKind.RATE_LIMITED,
    500: ErrorKind.INTERNAL_SERVER,
    503: ErrorKind.OVERLOADED,
}


class ZaiError(Exception):
    """Error raised by the client for any failed call.

    Attributes:
        kind: Which member of the error taxonomy this failure belongs to.
        message: Human-readable message (provider message when available).
        status_code: HTTP status code, or 0 when no response was received.
        error_type: Provider error type string ("" when absent).
        error_code: Provider error code string ("" when absent).
        cause: The underlying exception, if any.
        debug_id: Short identifier for correlating logs.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int = 0,
        error_type: str = "",
        error_code: str = "",
        cause: BaseException | None = None,
        debug_id: str | None = None,
    ):
        """Initialize a ZaiError.

        Args:
            kind: Error kind.
            message: Human-readable message.
            status_code: HTTP status code (0 when not applicable).
            error_type: Provider error type.
            error_code: Provider error code.
            cause: Optional underlying exception.
            debug_id: Optional correlation ID (auto-generated if None).
        """
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.error_code = error_code
        self.cause = cause
        self.debug_id = debug_id or str(uuid.uuid4())[:8]

    @property
    def retryable(self) -> bool:
        """Whether another attempt could succeed."""
        return self.kind not in NON_RETRYABLE_KINDS

    def __str__(self) -> str:
        if self.status_code > 0:
            return (
                f"zai: {self.message} (status: {self.status_code}, "
                f"type: {self.error_type}, code: {self.error_code})"
            )
        return f"zai: {self.message}"

    def __repr__(self) -> str:
        return (
            f"ZaiError(kind={self.kind.value!r}, "
            f"message={self.message!r}, "
            f"status_code={self.status_code}, "
            f"debug_id={self.debug_id!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for structured logging.

        Returns:
            Dictionary with the error details (excludes the cause).
        """
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "type": self.error_type,
            "code": self.error_code,
            "debug_id": self.debug_id,
        }


def kind_for_status(status_code: int) -> ErrorKind:
    """Map an HTTP error status to its error kind.

    Args:
        status_code: HTTP status code (>= 400).

    Returns:
        The mapped kind; unmapped codes are ErrorKind.STATUS.
    """
    return _STATUS_KINDS.get(status_code, ErrorKind.STATUS)


def _field(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def classify_error(status_code: int, raw_body: bytes | str) -> ZaiError:
    """Build a typed error from an HTTP error response.

    Uses the provider envelope ``{"error": {"message", "type", "code"}}`` when
    it decodes with a non-empty message, otherwise the raw body text.

    Args:
        status_code: HTTP status code of the response.
        raw_body: Response body as received.

    Returns:
        The classified ZaiError.
    """
    text = raw_body.decode("utf-8", errors="replace") if isinstance(raw_body, bytes) else raw_body
    kind = kind_for_status(status_code)

    try:
        envelope = json.loads(text)
    except ValueError:
        envelope = None

    error = envelope.get("error") if isinstance(envelope, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return ZaiError(
            kind=kind,
            message=_field(error.get("message")),
            status_code=status_code,
            error_type=_field(error.get("type")),
            error_code=_field(error.get("code")),
        )

    return ZaiError(kind=kind, message=text, status_code=status_code)
