"""HTTP Basic authentication with Trustap API keys.

Trustap API keys are sent as the Basic-auth username with an empty password
(:rfc:`7617`). :class:`BasicAuthPlugin` encodes the credential pair once and
reuses the token for every request of the owning client.
"""

from __future__ import annotations

import base64

from trustap.auth.base import AuthPlugin, AuthResult
from trustap.models import BasicAuthCredentials


def encode_basic_credentials(username: str, password: str = "") -> str:
    """Return the Base64 encoding of ``username:password``."""
    raw = f"{username}:{password}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def create_api_key_auth_header(api_key: str) -> str:
    """Return an ``Authorization`` header value for a bare API key.

    Example::

        create_api_key_auth_header("my-key")  # "Basic bXkta2V5Og=="
    """
    return f"Basic {encode_basic_credentials(api_key)}"


class BasicAuthPlugin(AuthPlugin):
    """Authenticate via HTTP Basic with a memoized token.

    The credential pair is encoded on first use only; later requests reuse the
    cached token.
    """

    def __init__(self, credentials: BasicAuthCredentials) -> None:
        self._credentials = credentials
        self._token: str | None = None

    @property
    def auth_type(self) -> str:
        return "basic"

    def token(self) -> str:
        """Return the encoded credentials, computing them on first call."""
        if self._token is None:
            self._token = encode_basic_credentials(
                self._credentials.username, self._credentials.password
            )
        return self._token

    async def authenticate(self) -> AuthResult:
        token = self.token()
        if not token:
            return AuthResult()
        return AuthResult(headers={"Authorization": f"Basic {token}"})
