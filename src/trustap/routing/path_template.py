"""Path template compilation.

Catalog paths carry ``{name}`` placeholders (``/users/{userId}``). A template
is parsed once into literal segments interleaved with parameter slots, and the
resulting :class:`PathTemplate` renders concrete paths on every request
without re-scanning the string.

Unresolved placeholders are deliberately left in the output: a missing or
``None`` value renders as the literal ``{name}`` token, so callers can detect
an incomplete path by substring search and the backend rejects it with an
ordinary HTTP error.
"""

from __future__ import annotations

import datetime
import decimal
import enum
import re
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import quote

from trustap.exceptions import PathParameterTypeError

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")

# Unreserved marks kept verbatim inside a path segment.
_SEGMENT_SAFE = "-_.!~*'()"


def to_path_param_segment(name: str, value: Any) -> str:
    """Render a single path parameter value as an unencoded string.

    Args:
        name: Placeholder name, used in the error message.
        value: A non-``None`` parameter value.

    Returns:
        The string form of *value*.

    Raises:
        PathParameterTypeError: If *value* has no meaningful string form
            (bytes, mappings, sequences, plain objects).
    """
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, (bytes, bytearray)):
        raise PathParameterTypeError(name, value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float, decimal.Decimal)):
        return str(value)
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if type(value).__str__ is not object.__str__:
        return str(value)
    raise PathParameterTypeError(name, value)


class PathTemplate:
    """A compiled path template.

    Call the instance with a mapping of parameter values to render a path.

    Example::

        template = compile_path_template("/users/{userId}/posts/{postId}")
        template({"userId": "123", "postId": 456})  # "/users/123/posts/456"
        template({"userId": "123"})                 # "/users/123/posts/{postId}"
    """

    __slots__ = ("path", "param_names", "_parts")

    def __init__(self, path: str) -> None:
        self.path = path
        self.param_names: tuple[str, ...] = tuple(_PLACEHOLDER_RE.findall(path))
        self._parts: tuple[str, ...] = tuple(_PLACEHOLDER_RE.split(path)[::2])

    def __call__(self, path_params: Optional[Mapping[str, Any]] = None) -> str:
        if not self.param_names or not path_params:
            return self.path

        result = [self._parts[0]]
        for index, name in enumerate(self.param_names):
            value = path_params.get(name)
            if value is None:
                result.append(f"{{{name}}}")
            else:
                result.append(quote(to_path_param_segment(name, value), safe=_SEGMENT_SAFE))
            result.append(self._parts[index + 1])
        return "".join(result)

    def __repr__(self) -> str:
        return f"PathTemplate({self.path!r})"


def compile_path_template(path: str) -> PathTemplate:
    """Compile *path* into a reusable :class:`PathTemplate`.

    Templates without placeholders render their path unchanged for any input.
    """
    return PathTemplate(path)
