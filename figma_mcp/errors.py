"""Error taxonomy for Figma API failures.

Every failure the client can produce is a :class:`FigmaApiError` carrying an
:class:`ErrorKind`. Tool handlers turn them into the error envelope through
:func:`error_details`; nothing here is ever retried automatically.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMIT = "RATE_LIMIT_EXCEEDED"
    API = "FIGMA_API_ERROR"
    NETWORK = "NETWORK_ERROR"


def _is_retryable_status(status_code: Optional[int]) -> bool:
    return status_code is not None and (status_code == 429 or status_code >= 500)


class FigmaApiError(Exception):
    """Any non-2xx answer from the Figma API not covered by a subclass."""

    kind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        retryable: Optional[bool] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.retryable = _is_retryable_status(status_code) if retryable is None else retryable

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": type(self).__name__,
            "code": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "retryable": self.retryable,
        }


class AuthenticationError(FigmaApiError):
    """Missing token, or a token Figma rejected."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=401, retryable=False)


class ForbiddenError(FigmaApiError):
    """Valid token without permission on the resource."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=403, retryable=False)


class NotFoundError(FigmaApiError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, path: str) -> None:
        super().__init__(f"{resource} not found: {path}", status_code=404, retryable=False)
        self.resource = resource
        self.path = path

    def to_dict(self) -> Dict[str, Any]:
        details = super().to_dict()
        details["resource"] = self.resource
        details["path"] = self.path
        return details


class RateLimitError(FigmaApiError):
    """Upstream throttling. ``retry_after`` is in seconds."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str, retry_after: int) -> None:
        super().__init__(message, status_code=429, retryable=True)
        self.retry_after = retry_after

    def to_dict(self) -> Dict[str, Any]:
        details = super().to_dict()
        details["retry_after"] = self.retry_after
        return details


class NetworkError(FigmaApiError):
    """The request never produced an HTTP response (timeout, DNS, refused)."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=None, retryable=True)


class StatefulModeNotSupportedError(RuntimeError):
    """Raised when the server is asked to keep MCP sessions between requests."""


def error_details(error: BaseException) -> Dict[str, Any]:
    """Structured description of ``error`` for the tool error envelope and logs."""
    if isinstance(error, FigmaApiError):
        return error.to_dict()
    return {
        "name": type(error).__name__,
        "code": "UNKNOWN_ERROR",
        "message": str(error),
    }
