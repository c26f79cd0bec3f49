"""Security map compilation and lookup.

The security map declares, per catalog path and HTTP method, which security
schemes the endpoint accepts::

    {
        "/charge": {"GET": ["APIKey"]},
        "/users/{userId}": {"GET": ["OAuth2"], "PUT": ["OAuth2"]},
    }

:func:`compile_security_map` turns this into two structures:

* an **exact index** for paths without placeholders (O(1) lookup), and
* an ordered **pattern list** for parameterised paths, where each
  ``{identifier}`` segment matches exactly one path segment.

:func:`resolve_security_schemes` consults the exact index first and only
scans the patterns on a miss; the first matching pattern that declares the
method wins.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from trustap.exceptions import UnsafePatternError

SecurityMap = Mapping[str, Mapping[str, Sequence[str]]]

_IDENTIFIER_RE = re.compile(r"\{[a-z_]\w*\}", re.IGNORECASE)
_SAFE_PATTERN_RE = re.compile(r"^[\w\-./^[\]$+*?(){}|\\]+$")
_SEGMENT_WILDCARD = "[^/]+"


@dataclass(frozen=True)
class SecurityPattern:
    """A parameterised security-map entry."""

    regex: re.Pattern[str]
    methods: Mapping[str, tuple[str, ...]]


@dataclass
class CompiledSecurityMap:
    """Lookup structure produced by :func:`compile_security_map`.

    Attributes:
        exact: Path -> method -> schemes, for paths without placeholders.
        patterns: Parameterised entries in declaration order.
    """

    exact: dict[str, dict[str, tuple[str, ...]]] = field(default_factory=dict)
    patterns: list[SecurityPattern] = field(default_factory=list)


def create_safe_path_regex(pattern: str) -> re.Pattern[str]:
    """Compile *pattern* after checking it only uses path and regex characters.

    The pattern is built from catalog data, never from request input; the
    character check rejects anything the path rewrite could not have produced.

    Raises:
        UnsafePatternError: If *pattern* contains other characters.
    """
    if not _SAFE_PATTERN_RE.match(pattern):
        raise UnsafePatternError(pattern)
    return re.compile(pattern)


def path_to_pattern(path: str) -> str:
    """Rewrite a templated path into an anchored regular expression string.

    Example::

        path_to_pattern("/users/{userId}")  # r"^/users/[^/]+$"
    """
    pieces: list[str] = []
    last_index = 0
    for match in _IDENTIFIER_RE.finditer(path):
        pieces.append(re.escape(path[last_index:match.start()]))
        pieces.append(_SEGMENT_WILDCARD)
        last_index = match.end()
    pieces.append(re.escape(path[last_index:]))
    return f"^{''.join(pieces)}$"


def compile_security_map(security_map: Optional[SecurityMap]) -> CompiledSecurityMap:
    """Compile a declarative security map into exact and pattern lookups.

    Args:
        security_map: Path -> method -> scheme names. ``None`` compiles to an
            empty map.

    Returns:
        A :class:`CompiledSecurityMap`.

    Raises:
        UnsafePatternError: If a parameterised path produces a pattern outside
            the safe character set.
    """
    compiled = CompiledSecurityMap()
    if not security_map:
        return compiled

    for path, methods in security_map.items():
        if not methods:
            continue
        if "{" in path:
            compiled.patterns.append(
                SecurityPattern(
                    regex=create_safe_path_regex(path_to_pattern(path)),
                    methods={method.upper(): tuple(schemes) for method, schemes in methods.items()},
                )
            )
        else:
            method_map = compiled.exact.setdefault(path, {})
            for method, schemes in methods.items():
                if schemes is not None:
                    method_map[method.upper()] = tuple(schemes)

    return compiled


def resolve_security_schemes(
    compiled: CompiledSecurityMap,
    pathname: str,
    method: str,
) -> tuple[str, ...]:
    """Return the security schemes declared for *method* on *pathname*.

    An exact entry for *pathname* is authoritative: its scheme list for
    *method* is returned, or ``()`` if the method is not declared there.
    Otherwise the first pattern that matches the whole path and declares
    *method* wins, even when its scheme list is empty.

    Returns:
        A tuple of scheme names; empty when nothing is declared.
    """
    exact_methods = compiled.exact.get(pathname)
    if exact_methods is not None:
        return exact_methods.get(method, ())

    for entry in compiled.patterns:
        if entry.regex.fullmatch(pathname) and method in entry.methods:
            return entry.methods[method]

    return ()
