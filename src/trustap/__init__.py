"""trustap -- Python SDK for the Trustap escrow and payment API.

The SDK exposes every catalog endpoint by operation id, injects the right
credentials per endpoint (API-key Basic auth or OAuth2 bearer tokens) and
validates incoming webhooks.

Typical usage::

    from trustap import create_trustap_client

    async with create_trustap_client(
        api_url="https://dev.stage.trustap.com/api/v4",
        basic_auth={"username": "my-api-key"},
        get_access_token=fetch_user_token,
    ) as client:
        result = await client["basic.getCharge"](
            params={"query": {"price": 1000, "currency": "eur"}}
        )
        if result.ok:
            print(result.data)

Modules:
    client: Client factory and the merged client object.
    dispatcher: Operation id -> memoized request handler.
    auth: Basic and bearer strategies plus per-request selection.
    transport: httpx-backed transport, middleware and path-based calls.
    routing: Path templates, security-map lookup and option normalisation.
    webhooks: Webhook event models, handler registry and lifecycle states.
    models: Pydantic models for client options and the catalog.
    exceptions: Exception hierarchy rooted at :class:`TrustapError`.
"""

from trustap.auth import create_api_key_auth_header, create_bearer_auth_header
from trustap.client import (
    TrustapClient,
    TrustapClientDependencies,
    create_trustap_client,
    create_trustap_client_with_deps,
)
from trustap.config import TRUSTAP_BASE_URLS
from trustap.exceptions import TrustapError
from trustap.models import BasicAuthCredentials, ClientOptions, RequestConfig
from trustap.transport import ApiResult, HttpClient, Middleware

__version__ = "0.1.0"

__all__ = [
    "ApiResult",
    "BasicAuthCredentials",
    "ClientOptions",
    "HttpClient",
    "Middleware",
    "RequestConfig",
    "TRUSTAP_BASE_URLS",
    "TrustapClient",
    "TrustapClientDependencies",
    "TrustapError",
    "create_api_key_auth_header",
    "create_bearer_auth_header",
    "create_trustap_client",
    "create_trustap_client_with_deps",
]
