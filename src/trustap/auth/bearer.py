"""OAuth2 bearer-token authentication.

The SDK never acquires tokens itself: the caller supplies a
``get_access_token`` function (plain or coroutine) and
:class:`BearerAuthPlugin` calls it for every request routed to OAuth2.
Whatever the function raises reaches the caller unchanged.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from trustap.auth.base import AuthPlugin, AuthResult


def create_bearer_auth_header(access_token: str) -> str:
    """Return an ``Authorization`` header value for *access_token*."""
    return f"Bearer {access_token}"


class BearerAuthPlugin(AuthPlugin):
    """Authenticate via a bearer token from a caller-supplied function.

    An empty or falsy token yields an empty :class:`AuthResult`, so the
    request goes out without an ``Authorization`` header.
    """

    def __init__(self, get_access_token: Callable[[], Any]) -> None:
        self._get_access_token = get_access_token

    @property
    def auth_type(self) -> str:
        return "oauth2"

    async def authenticate(self) -> AuthResult:
        token = self._get_access_token()
        if inspect.isawaitable(token):
            token = await token
        if not token:
            return AuthResult()
        return AuthResult(headers={"Authorization": create_bearer_auth_header(token)})
