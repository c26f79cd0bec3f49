"""Authentication subsystem for the Trustap SDK.

Two strategies are supported: API-key Basic auth and OAuth2 bearer tokens.
:class:`AuthManager` picks one per request and
:class:`AuthHeaderMiddleware` applies it on the transport.
"""

from trustap.auth.base import AuthPlugin, AuthResult
from trustap.auth.basic import BasicAuthPlugin, create_api_key_auth_header, encode_basic_credentials
from trustap.auth.bearer import BearerAuthPlugin, create_bearer_auth_header
from trustap.auth.manager import AuthManager, create_default_manager, requires_basic_auth
from trustap.auth.middleware import AuthHeaderMiddleware

__all__ = [
    "AuthHeaderMiddleware",
    "AuthManager",
    "AuthPlugin",
    "AuthResult",
    "BasicAuthPlugin",
    "BearerAuthPlugin",
    "create_api_key_auth_header",
    "create_bearer_auth_header",
    "create_default_manager",
    "encode_basic_credentials",
    "requires_basic_auth",
]
