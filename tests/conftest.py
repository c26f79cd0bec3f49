"""Shared test fixtures for the Trustap SDK.

Provides an in-memory :class:`RecordingTransport` that implements the
transport contract without touching the network, the credentials used across
the suite, and a factory for clients wired to the recording transport.
These fixtures are automatically discovered by pytest and available to all
test modules without explicit imports.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, Optional

import httpx
import pytest

from trustap.client import TrustapClient, TrustapClientDependencies, create_trustap_client_with_deps
from trustap.models import BasicAuthCredentials, ClientOptions
from trustap.transport.middleware import MiddlewareChain
from trustap.transport.response import ApiResult

MOCK_API_URL = "https://test.trustap.com"
MOCK_ORIGIN = "https://mock.local"
MOCK_OAUTH_TOKEN = "test_oauth_token_abc123"
MOCK_BASIC_AUTH = BasicAuthCredentials(username="test_api_key", password="test_secret")

SAMPLE_CHARGE_QUERY = {"price": 1234, "currency": "usd"}
SAMPLE_TRANSACTION_BODY = {
    "charge": 250,
    "charge_calculator_version": 1,
    "charge_seller": 120,
    "currency": "usd",
    "description": "Test transaction",
    "price": 1234,
    "role": "buyer",
}
SAMPLE_CARRIER_FACILITY_REQUEST = {
    "country_code": "us",
    "delivery_type": "parcel_locker",
    "search_text": "Austin",
}


def encode_basic_auth(username: str, password: str) -> str:
    return base64.b64encode(f"{username}:{password}".encode()).decode()


# ---------------------------------------------------------------------------
# Recording transport
# ---------------------------------------------------------------------------


@dataclass
class RecordedRequest:
    """One call made through :class:`RecordingTransport`."""

    path: str
    method: str
    options: Any
    request: httpx.Request
    response: httpx.Response


class RecordingTransport:
    """In-memory transport that runs middleware and records every call.

    Each call builds an :class:`httpx.Request` against ``https://mock.local``
    so request middleware (notably the auth middleware) sees a real request
    object. Responses default to ``{"success": true}`` with status 200; use
    :meth:`set_response` to preset one per method and path.
    """

    def __init__(self) -> None:
        self.middleware = MiddlewareChain()
        self.requests: list[RecordedRequest] = []
        self._responses: dict[str, dict[str, Any]] = {}
        self.closed = False

    def use(self, middleware: Any) -> None:
        self.middleware.add(middleware)

    def set_response(
        self,
        path: str,
        method: str,
        *,
        data: Any = None,
        error: Any = None,
        status: Optional[int] = None,
    ) -> None:
        self._responses[f"{method.upper()}:{path}"] = {
            "data": data,
            "error": error,
            "status": status,
        }

    async def aclose(self) -> None:
        self.closed = True

    async def _dispatch(self, path: str, method: str, options: Any) -> ApiResult:
        headers = {}
        if isinstance(options, dict) and options.get("headers"):
            headers = dict(options["headers"])
        request = httpx.Request(method, f"{MOCK_ORIGIN}{path}", headers=headers)
        request = await self.middleware.run_request(request)

        preset = self._responses.get(f"{method}:{path}")
        if preset is None:
            body: Any = {"success": True}
            status = 200
        else:
            body = preset["data"] if preset["data"] is not None else preset["error"]
            status = preset["status"] or (400 if preset["error"] is not None else 200)
        response = httpx.Response(status, json=body, request=request)
        response = await self.middleware.run_response(request, response)

        self.requests.append(RecordedRequest(path, method, options, request, response))
        if preset is not None and preset["error"] is not None:
            return ApiResult(response=response, error=preset["error"])
        return ApiResult(response=response, data=preset["data"] if preset else None)

    async def get(self, path: str, options: Any = None) -> ApiResult:
        return await self._dispatch(path, "GET", options)

    async def post(self, path: str, options: Any = None) -> ApiResult:
        return await self._dispatch(path, "POST", options)

    async def put(self, path: str, options: Any = None) -> ApiResult:
        return await self._dispatch(path, "PUT", options)

    async def patch(self, path: str, options: Any = None) -> ApiResult:
        return await self._dispatch(path, "PATCH", options)

    async def delete(self, path: str, options: Any = None) -> ApiResult:
        return await self._dispatch(path, "DELETE", options)

    async def head(self, path: str, options: Any = None) -> ApiResult:
        return await self._dispatch(path, "HEAD", options)

    async def options(self, path: str, options: Any = None) -> ApiResult:
        return await self._dispatch(path, "OPTIONS", options)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


async def _mock_token() -> str:
    return MOCK_OAUTH_TOKEN


@pytest.fixture
def basic_auth() -> BasicAuthCredentials:
    return MOCK_BASIC_AUTH


@pytest.fixture
def basic_header() -> str:
    """Expected ``Authorization`` value for :data:`MOCK_BASIC_AUTH`."""
    return f"Basic {encode_basic_auth(MOCK_BASIC_AUTH.username, MOCK_BASIC_AUTH.password)}"


@pytest.fixture
def oauth_token() -> str:
    return MOCK_OAUTH_TOKEN


@pytest.fixture
def charge_query() -> dict[str, Any]:
    return dict(SAMPLE_CHARGE_QUERY)


@pytest.fixture
def transaction_body() -> dict[str, Any]:
    return dict(SAMPLE_TRANSACTION_BODY)


@pytest.fixture
def carrier_facility_request() -> dict[str, Any]:
    return dict(SAMPLE_CARRIER_FACILITY_REQUEST)


@pytest.fixture
def transport() -> RecordingTransport:
    """A fresh recording transport."""
    return RecordingTransport()


@pytest.fixture
def deps(transport: RecordingTransport) -> TrustapClientDependencies:
    """Client dependencies that hand out the recording transport."""
    return TrustapClientDependencies(create_client=lambda base_url, config=None: transport)


def make_options(**overrides: Any) -> ClientOptions:
    """Test client options: Basic and OAuth2 both configured unless overridden."""
    values: dict[str, Any] = {
        "api_url": MOCK_API_URL,
        "basic_auth": MOCK_BASIC_AUTH,
        "get_access_token": _mock_token,
    }
    values.update(overrides)
    return ClientOptions(**values)


@pytest.fixture
def make_client(deps: TrustapClientDependencies):
    """Factory fixture: ``make_client(**option_overrides) -> TrustapClient``."""

    def _make(**overrides: Any) -> TrustapClient:
        return create_trustap_client_with_deps(deps, make_options(**overrides))

    return _make
