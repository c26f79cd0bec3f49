"""HTTP transport for the Trustap SDK.

Provides the httpx-backed client that executes requests, the middleware
chain applied around each request, and the path-based calling convention.

Classes:
    :class:`HttpClient` -- async transport backed by :class:`httpx.AsyncClient`.
    :class:`Middleware` -- base class for ``on_request``/``on_response`` hooks.
    :class:`PathBasedClient` -- ``client["/path"].get(...)`` access.
    :class:`ApiResult` -- ``data``/``error`` plus the final response.
"""

from trustap.transport.http_client import HttpClient, MinimalHttpClient, serialize_query
from trustap.transport.middleware import Middleware, MiddlewareChain
from trustap.transport.path_client import PathBasedClient, PathRoute, wrap_as_path_based_client
from trustap.transport.response import ApiResult

__all__ = [
    "ApiResult",
    "HttpClient",
    "Middleware",
    "MiddlewareChain",
    "MinimalHttpClient",
    "PathBasedClient",
    "PathRoute",
    "serialize_query",
    "wrap_as_path_based_client",
]
