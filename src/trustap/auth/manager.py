"""Auth manager -- per-request authentication strategy selection.

Trustap endpoints accept either an API key (HTTP Basic) or an OAuth2 access
token (Bearer). The :class:`AuthManager` decides, for each outgoing request,
which of its registered plugins supplies the ``Authorization`` header:

1. The request path is made catalog-relative with
   :func:`~trustap.config.strip_base_path`.
2. ``auth_overrides`` is consulted, relative path first, then the full path.
   ``"basic"`` forces Basic, ``"oauth2"`` forces Bearer, ``"auto"`` (or no
   entry) falls through to step 3.
3. :func:`requires_basic_auth` inspects the schemes declared in the security
   map plus a few path suffixes.

When Basic is chosen but no Basic plugin is registered the Bearer plugin is
used instead, if any.

For most use cases, call :func:`create_default_manager` with the client
options.

See Also:
    :class:`~trustap.auth.middleware.AuthHeaderMiddleware` -- applies the
    :class:`~trustap.auth.base.AuthResult` produced here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Optional

from trustap.auth.base import AuthPlugin, AuthResult
from trustap.auth.basic import BasicAuthPlugin
from trustap.auth.bearer import BearerAuthPlugin
from trustap.config import strip_base_path
from trustap.exceptions import ConfigError
from trustap.models import ClientOptions
from trustap.routing.security_map import CompiledSecurityMap, resolve_security_schemes

logger = logging.getLogger(__name__)

API_KEY_SCHEME = "APIKey"
BASIC_AUTH_SUFFIXES = ("/charge", "/p2p/charge", "/guest_users")


def requires_basic_auth(pathname: str, schemes: Sequence[str]) -> bool:
    """Return ``True`` when a request to *pathname* should use Basic auth.

    Basic applies when the endpoint declares the ``APIKey`` scheme, or when
    the catalog-relative path ends with one of :data:`BASIC_AUTH_SUFFIXES`.
    The suffix rules cover endpoints whose published security metadata omits
    ``APIKey`` although the API accepts it.
    """
    if API_KEY_SCHEME in schemes:
        return True
    return pathname.endswith(BASIC_AUTH_SUFFIXES)


class AuthManager:
    """Registry of auth plugins plus the per-request strategy rules.

    Args:
        security_map: Compiled security map used to look up declared schemes.
        overrides: Exact path -> ``"basic"``/``"oauth2"``/``"auto"``.
        base_path: Configured API base path, stripped before lookups.

    Example::

        manager = AuthManager(compile_security_map(SECURITY_MAP), base_path="/api/v4")
        manager.register(BasicAuthPlugin(BasicAuthCredentials(username="key")))
        result = await manager.authenticate("/api/v4/charge", "GET")
    """

    def __init__(
        self,
        security_map: Optional[CompiledSecurityMap] = None,
        overrides: Optional[Mapping[str, str]] = None,
        base_path: str = "",
    ) -> None:
        self._plugins: dict[str, AuthPlugin] = {}
        self._security_map = security_map or CompiledSecurityMap()
        self._overrides = dict(overrides or {})
        self._base_path = base_path

    # ------------------------------------------------------------------ #
    # Registry
    # ------------------------------------------------------------------ #

    def register(self, plugin: AuthPlugin) -> None:
        """Register *plugin* under its :attr:`~AuthPlugin.auth_type`.

        A plugin already registered for the same type is replaced.
        """
        self._plugins[plugin.auth_type] = plugin

    def get_plugin(self, auth_type: str) -> AuthPlugin:
        """Return the plugin registered for *auth_type*.

        Raises:
            ConfigError: If no plugin is registered for *auth_type*.
        """
        plugin = self._plugins.get(auth_type)
        if plugin is None:
            available = ", ".join(sorted(self._plugins)) or "(none)"
            raise ConfigError(
                f"No auth plugin registered for type '{auth_type}'. "
                f"Available types: {available}"
            )
        return plugin

    def has_plugin(self, auth_type: str) -> bool:
        return auth_type in self._plugins

    def list_types(self) -> list[str]:
        """Return the registered auth types, sorted."""
        return sorted(self._plugins)

    # ------------------------------------------------------------------ #
    # Strategy selection
    # ------------------------------------------------------------------ #

    def lookup_override(self, pathname: str, full_pathname: str) -> Optional[str]:
        """Return the override for the relative path, else the full path."""
        override = self._overrides.get(pathname)
        if override is None:
            override = self._overrides.get(full_pathname)
        return override

    def wants_basic(self, full_pathname: str, method: str) -> bool:
        """Decide whether a request should prefer Basic over Bearer auth."""
        pathname = strip_base_path(full_pathname, self._base_path)
        override = self.lookup_override(pathname, full_pathname)
        if override == "basic":
            return True
        if override == "oauth2":
            return False

        schemes = resolve_security_schemes(self._security_map, pathname, method.upper())
        return requires_basic_auth(pathname, schemes)

    def select_plugin(self, full_pathname: str, method: str) -> Optional[AuthPlugin]:
        """Return the plugin to use for a request, or ``None`` for no auth."""
        basic = self._plugins.get("basic")
        bearer = self._plugins.get("oauth2")
        if basic is not None and self.wants_basic(full_pathname, method):
            return basic
        return bearer

    async def authenticate(self, full_pathname: str, method: str) -> AuthResult:
        """Resolve credentials for a request to *full_pathname*.

        Exceptions raised by the access-token supplier propagate unchanged.
        """
        plugin = self.select_plugin(full_pathname, method)
        if plugin is None:
            return AuthResult()
        logger.debug("Using %s auth for %s %s", plugin.auth_type, method, full_pathname)
        return await plugin.authenticate()


def create_default_manager(
    options: ClientOptions,
    security_map: Optional[CompiledSecurityMap] = None,
    base_path: str = "",
) -> Optional[AuthManager]:
    """Build an :class:`AuthManager` for *options*.

    Returns:
        A manager with a Basic plugin when ``basic_auth`` is set and a Bearer
        plugin when ``get_access_token`` is set, or ``None`` when neither is
        configured.
    """
    if options.basic_auth is None and options.get_access_token is None:
        return None

    manager = AuthManager(security_map, options.auth_overrides, base_path)
    if options.basic_auth is not None:
        manager.register(BasicAuthPlugin(options.basic_auth))
    if options.get_access_token is not None:
        manager.register(BearerAuthPlugin(options.get_access_token))
    return manager
