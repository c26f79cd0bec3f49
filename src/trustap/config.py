"""Base URL and base-path resolution for Trustap clients.

A client talks to a *host* (``https://dev.stage.trustap.com``) and prefixes
every catalog path with a *base path* (``/api/v4``). Callers usually pass a
single ``api_url`` containing both; this module splits it:

* :func:`infer_base_config` -- split ``api_url`` into ``(base_url, base_path)``
  honouring an explicit ``base_path`` override.
* :func:`join_paths` -- prefix a catalog path with the base path.
* :func:`strip_base_path` -- the inverse, used by the auth resolver to look
  up catalog-relative paths from outgoing request URLs.

Precedence for the base path (highest wins):

1. the explicit ``base_path`` option,
2. the path portion of ``api_url``,
3. :data:`DEFAULT_BASE_PATH`.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional
from urllib.parse import urlsplit

DEFAULT_BASE_PATH = "/api/v4"

TRUSTAP_BASE_URLS = {
    "staging": "https://dev.stage.trustap.com/api/v1",
    "production": "https://dev.trustap.com/api/v1",
}
"""Published API roots by environment."""

_VERSION_PREFIX_RE = re.compile(r"^/api/v\d+", re.IGNORECASE)
_DUPLICATE_SLASHES_RE = re.compile(r"/+")


class BaseConfig(NamedTuple):
    """Result of :func:`infer_base_config`."""

    base_url: str
    base_path: str


def remove_trailing_slash(value: str) -> str:
    """Return *value* without any trailing ``/`` characters."""
    return value.rstrip("/")


def normalize_base_path(base_path: Optional[str]) -> str:
    """Normalise a base path to ``/segment[/segment...]`` or ``""``.

    Blank values and ``"/"`` normalise to the empty string; a leading slash is
    added when missing and trailing slashes are removed.

    Example::

        normalize_base_path("api/v4/")  # "/api/v4"
        normalize_base_path("/")        # ""
    """
    if not base_path:
        return ""
    trimmed = base_path.strip()
    if not trimmed or trimmed == "/":
        return ""
    with_leading_slash = trimmed if trimmed.startswith("/") else f"/{trimmed}"
    return remove_trailing_slash(with_leading_slash)


def infer_base_config(api_url: str, base_path: Optional[str] = None) -> BaseConfig:
    """Split *api_url* into the transport base URL and the catalog base path.

    When *api_url* parses as an absolute URL, its scheme and host become the
    base URL and a non-root path becomes the inferred base path. Otherwise the
    whole string (minus trailing slashes) is used verbatim as the base URL.

    Args:
        api_url: The API root supplied by the caller.
        base_path: Explicit base path; always wins over the inferred one.

    Returns:
        A :class:`BaseConfig` tuple.

    Example::

        infer_base_config("https://dev.stage.trustap.com/api/v1")
        # BaseConfig(base_url="https://dev.stage.trustap.com", base_path="/api/v1")
    """
    inferred_path: Optional[str] = None
    parts = urlsplit(api_url)
    if parts.scheme and parts.netloc:
        if parts.path and parts.path != "/":
            inferred_path = remove_trailing_slash(parts.path)
        base_url = f"{parts.scheme}://{parts.netloc}"
    else:
        base_url = remove_trailing_slash(api_url)

    if base_path is not None:
        chosen = base_path
    elif inferred_path is not None:
        chosen = inferred_path
    else:
        chosen = DEFAULT_BASE_PATH

    return BaseConfig(
        base_url=remove_trailing_slash(base_url),
        base_path=normalize_base_path(chosen),
    )


def join_paths(base_path: str, path: str) -> str:
    """Prefix *path* with *base_path*, collapsing duplicate slashes.

    The result always starts with ``/``. An empty relative path yields the
    base path itself.

    Example::

        join_paths("/api/v4", "/users/{userId}")  # "/api/v4/users/{userId}"
        join_paths("", "charge")                  # "/charge"
    """
    sanitized_base = normalize_base_path(base_path)
    has_leading_slash = path.startswith("/")
    relative = path[1:] if has_leading_slash else path

    if not sanitized_base:
        return path if has_leading_slash else f"/{relative}"
    if not relative:
        return sanitized_base
    return _DUPLICATE_SLASHES_RE.sub("/", f"{sanitized_base}/{relative}")


def strip_base_path(pathname: str, base_path: str) -> str:
    """Return *pathname* relative to the API root.

    Strips *base_path* when it prefixes *pathname*; otherwise falls back to
    stripping a generic ``/api/v<digits>`` prefix. The result always starts
    with ``/``.

    Example::

        strip_base_path("/api/v4/charge", "/api/v4")  # "/charge"
        strip_base_path("/api/v2/charge", "/custom")  # "/charge"
    """
    normalized = pathname
    if base_path and normalized.startswith(base_path):
        normalized = normalized[len(base_path):] or "/"
    elif _VERSION_PREFIX_RE.match(normalized):
        normalized = _VERSION_PREFIX_RE.sub("", normalized, count=1) or "/"

    if not normalized.startswith("/"):
        normalized = f"/{normalized}"
    return normalized
