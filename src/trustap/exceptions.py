"""Exception hierarchy for the Trustap SDK.

All exceptions raised by the SDK itself inherit from :class:`TrustapError`.
Errors raised by caller-supplied code (middleware hooks, access-token
suppliers) and by :mod:`httpx` are never wrapped -- they propagate to the
caller unchanged.

HTTP status outcomes are *not* exceptions: a non-2xx response is returned as
an :class:`~trustap.transport.response.ApiResult` with ``error`` populated.

Subclass hierarchy::

    TrustapError
    +-- ConfigError
    +-- InvalidUsageError
    +-- UnsupportedMethodError
    +-- UnsafePatternError
    +-- MiddlewareError
    +-- WebhookValidationError
    +-- PathParameterTypeError  (also a TypeError)
"""

from __future__ import annotations


class TrustapError(Exception):
    """Base exception for all Trustap SDK errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(TrustapError):
    """Raised for invalid client construction options."""


class InvalidUsageError(TrustapError):
    """Raised when a request is made with an unsupported calling convention."""


class UnsupportedMethodError(TrustapError):
    """Raised when an operation mapping declares an HTTP verb the transport cannot send.

    Args:
        operation_id: The operation whose mapping is invalid.
        method: The offending verb as declared in the mapping.
    """

    def __init__(self, operation_id: str, method: str):
        super().__init__(f"Unsupported method {method} for {operation_id}")
        self.operation_id = operation_id
        self.method = method


class UnsafePatternError(TrustapError):
    """Raised when a security-map path compiles to a pattern outside the safe character set."""

    def __init__(self, pattern: str):
        super().__init__(f"Invalid pattern for path regex: {pattern}")
        self.pattern = pattern


class MiddlewareError(TrustapError):
    """Raised when a middleware hook returns something other than a request/response."""


class WebhookValidationError(TrustapError):
    """Raised when a webhook payload does not match the schema for its event code."""


class PathParameterTypeError(TrustapError, TypeError):
    """Raised when a path parameter value cannot be rendered into a URL segment.

    Args:
        name: The placeholder name in the path template.
        value: The rejected value.
    """

    def __init__(self, name: str, value: object):
        super().__init__(
            f'Unsupported path parameter "{name}" of type {type(value).__name__}'
        )
        self.name = name
