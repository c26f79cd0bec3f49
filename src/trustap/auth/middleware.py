"""Transport middleware that injects the ``Authorization`` header."""

from __future__ import annotations

import httpx

from trustap.auth.manager import AuthManager
from trustap.transport.middleware import Middleware


class AuthHeaderMiddleware(Middleware):
    """Add credentials chosen by an :class:`AuthManager` to outgoing requests.

    A request that already carries an ``Authorization`` header is passed
    through untouched, so callers can always authenticate a single call by
    hand.
    """

    def __init__(self, manager: AuthManager) -> None:
        self.manager = manager

    async def on_request(self, request: httpx.Request) -> httpx.Request:
        if "authorization" in request.headers:
            return request

        # Encoded path, so an escaped "/" inside a parameter stays one segment.
        pathname = request.url.raw_path.split(b"?", 1)[0].decode("ascii")
        result = await self.manager.authenticate(pathname, request.method)
        request.headers.update(result.headers)
        return request
