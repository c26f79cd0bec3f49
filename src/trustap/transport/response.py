"""Result container and body extraction for transport calls.

Every transport call resolves to an :class:`ApiResult` carrying either
``data`` (2xx) or ``error`` (anything else), never both, together with the
final :class:`httpx.Response`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx


@dataclass
class ApiResult:
    """Outcome of one API call.

    Attributes:
        response: The response after all ``on_response`` middleware ran.
        data: Decoded body of a successful response, or ``None``.
        error: Decoded body of an unsuccessful response, or ``None``.
    """

    response: httpx.Response
    data: Any = None
    error: Any = None

    @property
    def ok(self) -> bool:
        """``True`` when the response status is 2xx."""
        return self.response.is_success


def has_empty_body(response: httpx.Response, method: Optional[str] = None) -> bool:
    """Return ``True`` for responses that carry no body by definition.

    Covers 204 responses, replies to ``HEAD`` requests, an explicit
    ``Content-Length: 0`` and bodies that are simply empty.
    """
    if response.status_code == 204:
        return True
    if method is not None and method.upper() == "HEAD":
        return True
    if response.headers.get("content-length") == "0":
        return True
    return not response.content


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first. If that fails (e.g. the
    response is HTML or plain text), returns the raw text. Returns ``None``
    for responses with no content.
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        pass

    return response.text


def build_result(response: httpx.Response, method: Optional[str] = None) -> ApiResult:
    """Wrap *response* into an :class:`ApiResult` according to its status."""
    body = None if has_empty_body(response, method) else extract_response_data(response)
    if response.is_success:
        return ApiResult(response=response, data=body)
    return ApiResult(response=response, error=body)
