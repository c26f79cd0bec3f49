"""Request option normalisation.

Operations accept query parameters in two shapes::

    {"params": {"query": {"price": 1234}}}   # current
    {"query": {"price": 1234}}               # deprecated

:func:`normalize_request_options` folds the deprecated shape into the current
one so the transport only ever reads ``params["query"]``. The caller's dicts
are never mutated.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping
from typing import Any, Optional

from trustap.exceptions import InvalidUsageError

logger = logging.getLogger(__name__)

LEGACY_QUERY_WARNING = (
    "Using {'query': ...} is deprecated. Please use "
    "{'params': {'query': ...}} instead. The legacy format will be removed "
    "in a future major version."
)


def normalize_request_options(options: Any, *, allow_legacy_query: bool = True) -> Any:
    """Return *options* with any legacy ``query`` key folded into ``params``.

    Non-mapping input is returned unchanged. When the legacy ``query`` key is
    present a :class:`DeprecationWarning` is emitted and its value is used
    for ``params["query"]`` only if that is not already set; the top-level
    key is dropped either way. When only ``params`` is present it is shallow
    copied.

    Args:
        options: Caller-supplied request options.
        allow_legacy_query: When ``False`` the legacy shape is rejected.

    Returns:
        A new dict (or the original object when nothing needed copying).

    Raises:
        InvalidUsageError: If the legacy shape is used while disabled.
    """
    if not isinstance(options, Mapping):
        return options

    raw_params = options.get("params")
    params = dict(raw_params) if isinstance(raw_params, Mapping) else None

    if "query" in options:
        if not allow_legacy_query:
            raise InvalidUsageError(
                "The top-level 'query' option is disabled for this client; "
                "pass {'params': {'query': ...}} instead"
            )
        warnings.warn(LEGACY_QUERY_WARNING, DeprecationWarning, stacklevel=3)
        logger.debug("Folding legacy 'query' option into params")

        rest = {key: value for key, value in options.items() if key != "query"}
        next_params = params if params is not None else {}
        if next_params.get("query") is None:
            next_params["query"] = options["query"]
        rest["params"] = next_params
        return rest

    if params is not None:
        return {**options, "params": params}

    return options


def get_params(options: Any) -> Optional[Mapping[str, Any]]:
    """Return the ``params`` mapping from normalised *options*, if any."""
    if not isinstance(options, Mapping):
        return None
    params = options.get("params")
    if not isinstance(params, Mapping):
        return None
    return params
