"""Path-based calling convention on top of a transport.

``client["/api/v4/users/{userId}"].get(params={"path": {"userId": "u1"}})``
addresses an endpoint by its literal path instead of its operation id. Paths
are resolved against the transport's base URL exactly as given, so they must
include the API prefix.
"""

from __future__ import annotations

from typing import Any, Optional


def merge_options(options: Optional[dict[str, Any]], overrides: dict[str, Any]) -> Any:
    """Combine a positional options dict with keyword options (keywords win)."""
    if not overrides:
        return options
    return {**(options or {}), **overrides}


class PathRoute:
    """Verb methods bound to one literal path."""

    __slots__ = ("path", "_client")

    def __init__(self, client: Any, path: str) -> None:
        self._client = client
        self.path = path

    async def get(self, options: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        return await self._client.get(self.path, merge_options(options, kwargs))

    async def post(self, options: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        return await self._client.post(self.path, merge_options(options, kwargs))

    async def put(self, options: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        return await self._client.put(self.path, merge_options(options, kwargs))

    async def patch(self, options: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        return await self._client.patch(self.path, merge_options(options, kwargs))

    async def delete(self, options: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        return await self._client.delete(self.path, merge_options(options, kwargs))

    async def head(self, options: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        return await self._client.head(self.path, merge_options(options, kwargs))

    async def options(self, options: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        return await self._client.options(self.path, merge_options(options, kwargs))

    def __repr__(self) -> str:
        return f"PathRoute({self.path!r})"


class PathBasedClient:
    """Mapping-style access to :class:`PathRoute` objects, one per path.

    Routes are created on first access and reused afterwards.
    """

    def __init__(self, client: Any) -> None:
        self._client = client
        self._routes: dict[str, PathRoute] = {}

    def __getitem__(self, path: str) -> PathRoute:
        route = self._routes.get(path)
        if route is None:
            route = self._routes.setdefault(path, PathRoute(self._client, path))
        return route

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path.startswith("/")


def wrap_as_path_based_client(client: Any) -> PathBasedClient:
    """Return a :class:`PathBasedClient` that sends through *client*."""
    return PathBasedClient(client)
