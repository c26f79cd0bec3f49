"""Client factory and the merged :class:`TrustapClient` object.

:func:`create_trustap_client` wires the pieces together:

1. splits ``api_url`` into the transport base URL and the API base path,
2. compiles the security map once,
3. creates the transport and installs
   :class:`~trustap.auth.middleware.AuthHeaderMiddleware` when credentials
   are configured,
4. exposes the catalog through an
   :class:`~trustap.dispatcher.OperationDispatcher` and literal paths through
   a :class:`~trustap.transport.path_client.PathBasedClient`.

Both calling conventions are available on the returned client::

    async with create_trustap_client(
        api_url="https://dev.stage.trustap.com/api/v4",
        basic_auth={"username": "my-api-key"},
    ) as client:
        charge = await client["basic.getCharge"](
            params={"query": {"price": 1000, "currency": "eur"}}
        )
        same = await client["/api/v4/charge"].get(
            params={"query": {"price": 1000, "currency": "eur"}}
        )

:func:`create_trustap_client_with_deps` takes the transport factory, the
path-client wrapper, the catalog and the security map explicitly, which is
how the test suite substitutes an in-memory transport.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from trustap.auth.manager import create_default_manager
from trustap.auth.middleware import AuthHeaderMiddleware
from trustap.catalog import OPERATION_ID_TO_PATH, SECURITY_MAP
from trustap.config import infer_base_config
from trustap.dispatcher import OperationDispatcher, OperationHandler, OperationMap
from trustap.exceptions import ConfigError
from trustap.models import ClientOptions
from trustap.routing.security_map import SecurityMap, compile_security_map
from trustap.transport.http_client import HttpClient
from trustap.transport.path_client import PathRoute, wrap_as_path_based_client

logger = logging.getLogger(__name__)


class TrustapClient:
    """Operations by id, literal paths, and the raw transport in one object.

    ``client[key]`` returns the :class:`~trustap.dispatcher.OperationHandler`
    for a catalog operation id, a :class:`~trustap.transport.path_client.PathRoute`
    for keys starting with ``/``, and ``None`` for anything else.

    Attributes:
        operations: The operation dispatcher.
        paths: The path-based client.
        raw: The unwrapped transport, for direct calls and middleware.
    """

    def __init__(self, operations: OperationDispatcher, paths: Any, raw: Any) -> None:
        self.operations = operations
        self.paths = paths
        self.raw = raw

    def __getitem__(self, key: str) -> Union[OperationHandler, PathRoute, None]:
        handler = self.operations.get(key)
        if handler is not None:
            return handler
        if isinstance(key, str) and key.startswith("/"):
            return self.paths[key]
        return None

    def get(self, key: str) -> Union[OperationHandler, PathRoute, None]:
        """Same as ``client[key]``."""
        return self[key]

    def __contains__(self, key: object) -> bool:
        return key in self.operations or (isinstance(key, str) and key.startswith("/"))

    async def __aenter__(self) -> TrustapClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if it supports closing."""
        close = getattr(self.raw, "aclose", None)
        if close is not None:
            await close()


@dataclass
class TrustapClientDependencies:
    """Collaborators used by :func:`create_trustap_client_with_deps`.

    Attributes:
        create_client: Called as ``create_client(base_url, config=RequestConfig)``
            and must return an object implementing the transport verbs plus
            ``use(middleware)``.
        wrap_as_path_based_client: Builds the path-based view of the transport.
        operation_id_to_path: The operation catalog.
        security_map: Declared schemes per path and verb; ``None`` disables
            scheme lookups so only overrides and path suffixes apply.
    """

    create_client: Callable[..., Any] = HttpClient
    wrap_as_path_based_client: Callable[[Any], Any] = wrap_as_path_based_client
    operation_id_to_path: OperationMap = field(default_factory=lambda: OPERATION_ID_TO_PATH)
    security_map: Optional[SecurityMap] = field(default_factory=lambda: SECURITY_MAP)


def _coerce_options(
    options: Union[ClientOptions, Mapping[str, Any], None],
    overrides: Mapping[str, Any],
) -> ClientOptions:
    if isinstance(options, ClientOptions):
        if not overrides:
            return options
        options = options.model_dump()
    data = {**(options or {}), **overrides}
    try:
        return ClientOptions.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client options: {exc}") from exc


def create_trustap_client_with_deps(
    deps: TrustapClientDependencies,
    options: Union[ClientOptions, Mapping[str, Any], None] = None,
    **kwargs: Any,
) -> TrustapClient:
    """Build a :class:`TrustapClient` from explicit collaborators.

    Args:
        deps: Transport factory, path-client wrapper, catalog and security map.
        options: A :class:`~trustap.models.ClientOptions` or a mapping of its
            fields. Keyword arguments override individual fields.

    Raises:
        ConfigError: If the options do not validate.
        UnsafePatternError: If the security map contains an unsafe path.
    """
    opts = _coerce_options(options, kwargs)
    base = infer_base_config(opts.api_url, opts.base_path)
    compiled_security_map = compile_security_map(deps.security_map)

    client = deps.create_client(base.base_url, config=opts.request)
    manager = create_default_manager(opts, compiled_security_map, base.base_path)
    if manager is not None:
        client.use(AuthHeaderMiddleware(manager))

    logger.debug(
        "Created Trustap client for %s (base path %r, auth: %s)",
        base.base_url,
        base.base_path,
        ", ".join(manager.list_types()) if manager else "none",
    )

    dispatcher = OperationDispatcher(
        client,
        deps.operation_id_to_path,
        base.base_path,
        allow_legacy_query=opts.allow_legacy_query,
    )
    return TrustapClient(dispatcher, deps.wrap_as_path_based_client(client), client)


def create_trustap_client(
    options: Union[ClientOptions, Mapping[str, Any], None] = None,
    **kwargs: Any,
) -> TrustapClient:
    """Build a :class:`TrustapClient` backed by :class:`~trustap.transport.http_client.HttpClient`.

    Accepts the same arguments as :func:`create_trustap_client_with_deps`
    minus *deps*.
    """
    return create_trustap_client_with_deps(TrustapClientDependencies(), options, **kwargs)


__all__ = [
    "TrustapClient",
    "TrustapClientDependencies",
    "create_trustap_client",
    "create_trustap_client_with_deps",
]
