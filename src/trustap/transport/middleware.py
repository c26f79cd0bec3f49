"""Request/response middleware for the HTTP transport.

This module provides two components:

* :class:`Middleware` -- base class with pass-through ``on_request`` and
  ``on_response`` hooks. Subclasses override only the hooks they need; hooks
  may be plain methods or coroutines.
* :class:`MiddlewareChain` -- runs the hooks of every registered middleware
  in registration order, each receiving the output of the previous one.

A hook must return the (possibly replaced) :class:`httpx.Request` or
:class:`httpx.Response`. Returning anything else raises
:class:`~trustap.exceptions.MiddlewareError`. Exceptions raised inside a hook
are not caught: they abort the in-flight call and reach the caller unchanged.
"""

from __future__ import annotations

import inspect
from typing import Any

import httpx

from trustap.exceptions import MiddlewareError


class Middleware:
    """Base class for transport middleware.

    Example::

        class RequestIdMiddleware(Middleware):
            def on_request(self, request):
                request.headers["X-Request-Id"] = new_request_id()
                return request
    """

    def on_request(self, request: httpx.Request) -> Any:
        """Inspect or replace an outgoing request. Default: pass through."""
        return request

    def on_response(self, request: httpx.Request, response: httpx.Response) -> Any:
        """Inspect or replace a received response. Default: pass through."""
        return response


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class MiddlewareChain:
    """Ordered collection of middleware applied around each request."""

    def __init__(self) -> None:
        self._middleware: list[Any] = []

    def __len__(self) -> int:
        return len(self._middleware)

    def add(self, middleware: Any) -> None:
        """Append *middleware*; it runs after everything already registered."""
        self._middleware.append(middleware)

    async def run_request(self, request: httpx.Request) -> httpx.Request:
        """Run ``on_request`` hooks as a pipeline and return the final request."""
        for middleware in self._middleware:
            hook = getattr(middleware, "on_request", None)
            if hook is None:
                continue
            result = await _resolve(hook(request))
            if not isinstance(result, httpx.Request):
                raise MiddlewareError(
                    f"{type(middleware).__name__}.on_request must return an "
                    f"httpx.Request, got {type(result).__name__}"
                )
            request = result
        return request

    async def run_response(
        self,
        request: httpx.Request,
        response: httpx.Response,
    ) -> httpx.Response:
        """Run ``on_response`` hooks as a pipeline and return the final response."""
        for middleware in self._middleware:
            hook = getattr(middleware, "on_response", None)
            if hook is None:
                continue
            result = await _resolve(hook(request, response))
            if not isinstance(result, httpx.Response):
                raise MiddlewareError(
                    f"{type(middleware).__name__}.on_response must return an "
                    f"httpx.Response, got {type(result).__name__}"
                )
            response = result
        return response
