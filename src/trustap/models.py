"""Pydantic models shared across the Trustap SDK.

The models fall into two groups:

**Configuration models** -- supplied by the caller when building a client:
    :class:`BasicAuthCredentials`, :class:`RequestConfig`, and
    :class:`ClientOptions`.

**Routing models** -- describe the static operation catalog:
    :class:`HTTPMethod` and :class:`OperationMapping`.

All models use Pydantic v2. Routing models are frozen so that a compiled
catalog can be shared between client instances.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


AuthStrategy = Literal["basic", "oauth2", "auto"]
"""Per-path authentication override accepted in :attr:`ClientOptions.auth_overrides`."""


# --- Configuration ---


class BasicAuthCredentials(BaseModel):
    """API-key credentials sent as HTTP Basic authentication.

    Trustap issues an API key that is used as the Basic-auth username; the
    password is normally empty.
    """

    username: str
    password: str = Field(default="", description="Defaults to the empty string")


class RequestConfig(BaseModel):
    """Transport settings applied to every request made by a client."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class ClientOptions(BaseModel):
    """Options accepted by :func:`~trustap.client.create_trustap_client`.

    ``api_url`` may be a full URL including the API prefix
    (``https://dev.stage.trustap.com/api/v1``) -- the path portion is then
    used as the base path unless ``base_path`` is given explicitly. See
    :func:`~trustap.config.infer_base_config`.

    ``get_access_token`` may be a plain function or a coroutine function; it
    is called once per request that resolves to OAuth2 authentication.

    Example::

        ClientOptions(
            api_url="https://dev.stage.trustap.com/api/v4",
            basic_auth=BasicAuthCredentials(username="my-api-key"),
            auth_overrides={"/transactions": "basic"},
        )
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    api_url: str
    basic_auth: Optional[BasicAuthCredentials] = None
    get_access_token: Optional[Callable[[], Any]] = None
    auth_overrides: dict[str, AuthStrategy] = Field(default_factory=dict)
    base_path: Optional[str] = Field(
        default=None, description="Overrides the path inferred from api_url"
    )
    allow_legacy_query: bool = Field(
        default=True,
        description="Accept the deprecated top-level 'query' request option",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- Routing ---


class HTTPMethod(str, enum.Enum):
    """HTTP verbs the transport contract supports."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class OperationMapping(BaseModel):
    """Path and verb for one operation id in the catalog.

    ``method`` is kept as declared; it is checked against :class:`HTTPMethod`
    when the dispatcher builds the handler for the operation, so one bad
    entry does not prevent the rest of the catalog from loading.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    method: str
