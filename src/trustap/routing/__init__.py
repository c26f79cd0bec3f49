"""Routing primitives used by the operation dispatcher.

Everything in this sub-package is pure and synchronous; it is compiled once
per client and reused for every request.

Sub-modules:

* :mod:`~trustap.routing.path_template` -- compile ``/users/{userId}``
  templates into substitution functions.
* :mod:`~trustap.routing.security_map` -- compile the declarative
  endpoint-to-security-scheme table into exact + pattern lookups.
* :mod:`~trustap.routing.options` -- reconcile the legacy ``query`` request
  option with ``params["query"]``.
"""

from trustap.routing.options import get_params, normalize_request_options
from trustap.routing.path_template import PathTemplate, compile_path_template
from trustap.routing.security_map import (
    CompiledSecurityMap,
    compile_security_map,
    resolve_security_schemes,
)

__all__ = [
    "CompiledSecurityMap",
    "PathTemplate",
    "compile_path_template",
    "compile_security_map",
    "get_params",
    "normalize_request_options",
    "resolve_security_schemes",
]
