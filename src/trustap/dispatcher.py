"""Operation dispatcher -- named operations resolved to transport calls.

The dispatcher turns an operation id such as ``"basic.getCharge"`` into a
callable :class:`OperationHandler`. Handlers are built lazily on first access
from the static catalog (operation id -> ``{path, method}``) and cached for
the lifetime of the dispatcher, so the path template for each operation is
compiled exactly once.

Calling a handler:

1. merges keyword options into the positional options dict,
2. folds the deprecated top-level ``query`` option into ``params``,
3. substitutes ``params["path"]`` into the compiled path template, and
4. invokes the transport coroutine for the operation's verb with the
   resolved path and the normalised options.

Unknown operation ids resolve to ``None`` rather than raising, so
``dispatcher["typo"]`` can be tested for presence.

Example::

    dispatcher = OperationDispatcher(transport, OPERATION_ID_TO_PATH, base_path="/api/v4")
    result = await dispatcher["basic.getCharge"](params={"query": {"price": 1000, "currency": "eur"}})
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from typing import Any, Optional, Union

from trustap.config import join_paths
from trustap.exceptions import UnsupportedMethodError
from trustap.models import HTTPMethod, OperationMapping
from trustap.routing.options import get_params, normalize_request_options
from trustap.routing.path_template import PathTemplate, compile_path_template
from trustap.transport.path_client import merge_options

logger = logging.getLogger(__name__)

OperationMap = Mapping[str, Union[OperationMapping, Mapping[str, str]]]


def _coerce_mapping(raw: Union[OperationMapping, Mapping[str, str]]) -> OperationMapping:
    if isinstance(raw, OperationMapping):
        return raw
    return OperationMapping.model_validate(raw)


class OperationHandler:
    """Callable bound to one catalog operation.

    Attributes:
        operation_id: The catalog key this handler serves.
        method: Validated HTTP verb.
        template: Compiled template of the full (base-path-prefixed) path.
    """

    def __init__(
        self,
        transport: Any,
        operation_id: str,
        method: HTTPMethod,
        template: PathTemplate,
        *,
        allow_legacy_query: bool = True,
    ) -> None:
        self.operation_id = operation_id
        self.method = method
        self.template = template
        self._send = getattr(transport, method.value.lower())
        self._allow_legacy_query = allow_legacy_query

    async def __call__(self, options: Optional[dict[str, Any]] = None, **kwargs: Any) -> Any:
        to_send = normalize_request_options(
            merge_options(options, kwargs),
            allow_legacy_query=self._allow_legacy_query,
        )
        params = get_params(to_send)
        final_path = self.template(params.get("path") if params else None)
        return await self._send(final_path, to_send)

    def __repr__(self) -> str:
        return f"OperationHandler({self.operation_id!r}, {self.method.value} {self.template.path})"


class OperationDispatcher:
    """Memoizing accessor from operation ids to :class:`OperationHandler` objects.

    Args:
        transport: Object implementing the
            :class:`~trustap.transport.http_client.MinimalHttpClient` verbs.
        operation_id_to_path: The operation catalog.
        base_path: Prefix joined onto every catalog path.
        allow_legacy_query: Passed to every handler's option normaliser.
    """

    def __init__(
        self,
        transport: Any,
        operation_id_to_path: OperationMap,
        base_path: str = "",
        *,
        allow_legacy_query: bool = True,
    ) -> None:
        self._transport = transport
        self._operations = operation_id_to_path
        self._base_path = base_path
        self._allow_legacy_query = allow_legacy_query
        self._handlers: dict[str, OperationHandler] = {}
        self._lock = threading.Lock()

    def get(self, operation_id: str) -> Optional[OperationHandler]:
        """Return the handler for *operation_id*, or ``None`` if unknown.

        Raises:
            UnsupportedMethodError: If the catalog entry declares a verb the
                transport cannot send.
        """
        handler = self._handlers.get(operation_id)
        if handler is not None:
            return handler

        raw = self._operations.get(operation_id)
        if raw is None:
            return None

        with self._lock:
            handler = self._handlers.get(operation_id)
            if handler is None:
                handler = self._build_handler(operation_id, _coerce_mapping(raw))
                self._handlers[operation_id] = handler
        return handler

    def __getitem__(self, operation_id: str) -> Optional[OperationHandler]:
        return self.get(operation_id)

    def __contains__(self, operation_id: object) -> bool:
        return operation_id in self._operations

    def __iter__(self) -> Iterator[str]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def keys(self) -> list[str]:
        """Return every operation id in the catalog."""
        return list(self._operations)

    def preload(self) -> None:
        """Build the handler for every catalog operation now.

        Construction errors, such as an unsupported verb, surface here
        instead of on first access.
        """
        for operation_id in self._operations:
            self.get(operation_id)

    def _build_handler(self, operation_id: str, mapping: OperationMapping) -> OperationHandler:
        try:
            method = HTTPMethod(mapping.method.upper())
        except ValueError:
            raise UnsupportedMethodError(operation_id, mapping.method) from None

        template = compile_path_template(join_paths(self._base_path, mapping.path))
        logger.debug("Compiled handler %s -> %s %s", operation_id, method.value, template.path)
        return OperationHandler(
            self._transport,
            operation_id,
            method,
            template,
            allow_legacy_query=self._allow_legacy_query,
        )
