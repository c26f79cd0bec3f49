"""Asynchronous HTTP transport backed by :class:`httpx.AsyncClient`.

:class:`HttpClient` is the concrete implementation of the minimal transport
contract the dispatcher depends on (:class:`MinimalHttpClient`): one
coroutine per HTTP verb taking ``(path, options)`` plus ``use(middleware)``.

For each call it:

1. substitutes ``params["path"]`` into ``{name}`` placeholders,
2. serialises ``params["query"]`` (lists exploded, mapping values as
   ``key[sub]``, ``None`` dropped),
3. encodes ``body`` as JSON unless it is already ``str``/``bytes``,
4. runs ``on_request`` middleware, sends, runs ``on_response`` middleware,
5. returns an :class:`~trustap.transport.response.ApiResult`.

Non-2xx responses are results, not exceptions. Network failures raised by
httpx propagate unchanged.

Example::

    async with HttpClient("https://dev.stage.trustap.com") as client:
        result = await client.get("/api/v4/charge", {"params": {"query": {"price": 1000, "currency": "eur"}}})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Protocol

import httpx

from trustap.exceptions import InvalidUsageError
from trustap.models import RequestConfig
from trustap.routing.path_template import compile_path_template
from trustap.transport.middleware import MiddlewareChain
from trustap.transport.response import ApiResult, build_result

logger = logging.getLogger(__name__)


class MinimalHttpClient(Protocol):
    """The transport surface the operation dispatcher relies on."""

    def use(self, middleware: Any) -> None: ...

    async def get(self, path: str, options: Any = None) -> Any: ...

    async def post(self, path: str, options: Any = None) -> Any: ...

    async def put(self, path: str, options: Any = None) -> Any: ...

    async def patch(self, path: str, options: Any = None) -> Any: ...

    async def delete(self, path: str, options: Any = None) -> Any: ...

    async def head(self, path: str, options: Any = None) -> Any: ...

    async def options(self, path: str, options: Any = None) -> Any: ...


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def serialize_query(query: Optional[Mapping[str, Any]]) -> list[tuple[str, str]]:
    """Flatten a query mapping into ordered ``(key, value)`` pairs.

    Example::

        serialize_query({"ids": [1, 2], "filter": {"state": "paid"}, "skip": None})
        # [("ids", "1"), ("ids", "2"), ("filter[state]", "paid")]
    """
    if not query:
        return []

    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            for sub_key, sub_value in value.items():
                if sub_value is not None:
                    pairs.append((f"{key}[{sub_key}]", _query_value(sub_value)))
        elif isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(item)) for item in value if item is not None)
        else:
            pairs.append((key, _query_value(value)))
    return pairs


class HttpClient:
    """Middleware-aware async HTTP client used as the SDK transport.

    Args:
        base_url: Scheme and host every request path is resolved against.
        config: Timeout and SSL settings for the underlying httpx client.
        transport: Optional httpx transport (e.g. :class:`httpx.MockTransport`
            in tests).
        client: A pre-built :class:`httpx.AsyncClient`; when given,
            *config* and *transport* are ignored.
    """

    def __init__(
        self,
        base_url: str,
        *,
        config: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        config = config or RequestConfig()
        self.base_url = base_url
        self._middleware = MiddlewareChain()
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=config.timeout,
            verify=config.verify_ssl,
            transport=transport,
        )

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()

    # ------------------------------------------------------------------ #
    # Middleware
    # ------------------------------------------------------------------ #

    def use(self, middleware: Any) -> None:
        """Register *middleware* to run around every subsequent request."""
        self._middleware.add(middleware)

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    async def request(self, method: str, path: str, options: Any = None) -> ApiResult:
        """Send one request and wrap the outcome in an :class:`ApiResult`.

        Args:
            method: HTTP verb.
            path: Path relative to :attr:`base_url`; may contain ``{name}``
                placeholders filled from ``options["params"]["path"]``.
            options: Mapping with optional ``params``, ``body`` and
                ``headers`` keys.

        Raises:
            InvalidUsageError: If *options* is neither ``None`` nor a mapping.
            MiddlewareError: If a hook returns a malformed value.
        """
        if options is None:
            options = {}
        elif not isinstance(options, Mapping):
            raise InvalidUsageError(
                f"Request options must be a mapping, got {type(options).__name__}"
            )

        method = method.upper()
        params = options.get("params") or {}
        url = compile_path_template(path)(params.get("path"))

        build_kwargs: dict[str, Any] = {
            "params": serialize_query(params.get("query")),
            "headers": dict(options.get("headers") or {}),
        }
        body = options.get("body")
        if body is not None:
            if isinstance(body, (str, bytes)):
                build_kwargs["content"] = body
            else:
                build_kwargs["json"] = body

        request = self._client.build_request(method, url, **build_kwargs)
        request = await self._middleware.run_request(request)

        response = await self._client.send(request)
        response = await self._middleware.run_response(request, response)
        logger.debug("%s %s -> %s", method, request.url.path, response.status_code)

        return build_result(response, method)

    async def get(self, path: str, options: Any = None) -> ApiResult:
        """Send a GET request."""
        return await self.request("GET", path, options)

    async def post(self, path: str, options: Any = None) -> ApiResult:
        """Send a POST request."""
        return await self.request("POST", path, options)

    async def put(self, path: str, options: Any = None) -> ApiResult:
        """Send a PUT request."""
        return await self.request("PUT", path, options)

    async def patch(self, path: str, options: Any = None) -> ApiResult:
        """Send a PATCH request."""
        return await self.request("PATCH", path, options)

    async def delete(self, path: str, options: Any = None) -> ApiResult:
        """Send a DELETE request."""
        return await self.request("DELETE", path, options)

    async def head(self, path: str, options: Any = None) -> ApiResult:
        """Send a HEAD request."""
        return await self.request("HEAD", path, options)

    async def options(self, path: str, options: Any = None) -> ApiResult:
        """Send an OPTIONS request."""
        return await self.request("OPTIONS", path, options)
