"""Abstract base class for authentication plugins.

This module defines the two foundational types of the auth subsystem:

- :class:`AuthResult` -- a plain container for the HTTP headers an auth
  plugin produces for one request.
- :class:`AuthPlugin` -- the abstract base class that every authentication
  strategy must extend.

Plugins are asynchronous because the OAuth2 strategy calls a caller-supplied
token function that may itself be a coroutine.

See Also:
    :mod:`trustap.auth.manager` for per-request strategy selection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AuthResult:
    """Container for authentication headers to inject into a request.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "Bearer ..."}``).
            An empty result means "send the request without credentials".
    """

    def __init__(self, headers: dict[str, str] | None = None):
        self.headers = headers or {}

    def __bool__(self) -> bool:
        return bool(self.headers)


class AuthPlugin(ABC):
    """Abstract base class for authentication plugins.

    Every concrete strategy must provide:

    1. An :attr:`auth_type` property returning the strategy name used in
       ``auth_overrides`` (``"basic"`` or ``"oauth2"``).
    2. An :meth:`authenticate` coroutine returning an :class:`AuthResult`.
    """

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Return the strategy name this plugin implements."""
        ...

    @abstractmethod
    async def authenticate(self) -> AuthResult:
        """Produce the headers for one outgoing request.

        Returns:
            An :class:`AuthResult`; empty when no credential is available.
        """
        ...
