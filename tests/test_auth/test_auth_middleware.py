"""Tests for Authorization header injection through a full client."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from trustap.auth import AuthHeaderMiddleware, AuthManager, BasicAuthPlugin, BearerAuthPlugin
from trustap.models import BasicAuthCredentials
from trustap.routing.security_map import compile_security_map


class TestAuthHeaderInjection:
    @pytest.mark.asyncio
    async def test_basic_for_api_key_endpoint(self, make_client, transport, charge_query, basic_header) -> None:
        client = make_client(get_access_token=None)
        await client["basic.getCharge"](params={"query": charge_query})

        assert transport.requests[0].request.headers["Authorization"] == basic_header

    @pytest.mark.asyncio
    async def test_basic_preferred_over_bearer(self, make_client, transport, charge_query, basic_header) -> None:
        client = make_client()
        await client["basic.getCharge"](params={"query": charge_query})

        assert transport.requests[0].request.headers["Authorization"] == basic_header

    @pytest.mark.asyncio
    async def test_encoded_slash_in_path_param(self, make_client, transport, basic_header) -> None:
        client = make_client()
        await client["basic.getTransaction"](params={"path": {"transactionId": "a/b"}})

        record = transport.requests[0]
        assert record.path == "/api/v4/transactions/a%2Fb"
        assert record.request.headers["Authorization"] == basic_header

    @pytest.mark.asyncio
    async def test_bearer_for_oauth_endpoint(self, make_client, transport, oauth_token) -> None:
        get_access_token = AsyncMock(return_value=oauth_token)
        client = make_client(get_access_token=get_access_token)

        await client["oauth.getUser"](params={"path": {"userId": "user_1"}})

        assert transport.requests[0].request.headers["Authorization"] == f"Bearer {oauth_token}"
        get_access_token.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_bearer_when_basic_missing(self, make_client, transport, charge_query, oauth_token) -> None:
        client = make_client(basic_auth=None)
        await client["basic.getCharge"](params={"query": charge_query})

        assert transport.requests[0].request.headers["Authorization"] == f"Bearer {oauth_token}"

    @pytest.mark.asyncio
    async def test_override_forces_basic(self, make_client, transport, transaction_body, basic_header) -> None:
        client = make_client(auth_overrides={"/transactions": "basic"})
        await client["basic.createTransaction"](body=transaction_body)

        assert transport.requests[0].request.headers["Authorization"] == basic_header

    @pytest.mark.asyncio
    async def test_override_forces_oauth(self, make_client, transport, charge_query, oauth_token) -> None:
        client = make_client(auth_overrides={"/charge": "oauth2"})
        await client["basic.getCharge"](params={"query": charge_query})

        assert transport.requests[0].request.headers["Authorization"] == f"Bearer {oauth_token}"

    @pytest.mark.asyncio
    async def test_existing_header_not_overridden(self, make_client, transport, charge_query) -> None:
        client = make_client(get_access_token=None)
        await client["basic.getCharge"](
            headers={"Authorization": "Custom token"},
            params={"query": charge_query},
        )

        assert transport.requests[0].request.headers["Authorization"] == "Custom token"

    @pytest.mark.asyncio
    async def test_existing_header_skips_token_supplier(self, make_client, transport) -> None:
        get_access_token = AsyncMock(return_value="unused")
        client = make_client(get_access_token=get_access_token)
        await client["oauth.getUser"](
            headers={"authorization": "Bearer mine"},
            params={"path": {"userId": "user_1"}},
        )

        assert transport.requests[0].request.headers["Authorization"] == "Bearer mine"
        get_access_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_credentials_no_header(self, make_client, transport, carrier_facility_request) -> None:
        client = make_client(basic_auth=None, get_access_token=None)
        await client["basic.getCarrierFacilityOptions"](
            params={"path": {"carrier_id": "carrier_1"}},
            body=carrier_facility_request,
        )

        assert "Authorization" not in transport.requests[0].request.headers
        assert len(transport.middleware) == 0

    @pytest.mark.asyncio
    async def test_empty_token_no_header(self, make_client, transport) -> None:
        client = make_client(get_access_token=lambda: "")
        await client["oauth.getUser"](params={"path": {"userId": "user_1"}})

        assert "Authorization" not in transport.requests[0].request.headers

    @pytest.mark.asyncio
    async def test_token_supplier_error_propagates(self, make_client, transport) -> None:
        async def failing_supplier() -> str:
            raise RuntimeError("token refresh failed")

        client = make_client(get_access_token=failing_supplier)
        with pytest.raises(RuntimeError, match="token refresh failed"):
            await client["oauth.getUser"](params={"path": {"userId": "user_1"}})
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_custom_base_path_stripped(self, make_client, transport, charge_query, basic_header) -> None:
        client = make_client(base_path="/custom", get_access_token=None)
        await client["basic.getCharge"](params={"query": charge_query})

        assert transport.requests[0].path == "/custom/charge"
        assert transport.requests[0].request.headers["Authorization"] == basic_header


class TestAuthHeaderMiddleware:
    @pytest.mark.asyncio
    async def test_mutates_and_returns_request(self) -> None:
        manager = AuthManager()
        manager.register(BearerAuthPlugin(lambda: "tok"))
        middleware = AuthHeaderMiddleware(manager)

        request = httpx.Request("GET", "https://mock.local/api/v4/users/1")
        result = await middleware.on_request(request)

        assert result is request
        assert request.headers["Authorization"] == "Bearer tok"

    @pytest.mark.asyncio
    async def test_resolves_on_encoded_path(self) -> None:
        manager = AuthManager(
            compile_security_map({"/transactions/{transactionId}": {"GET": ["APIKey"]}}),
            base_path="/api/v4",
        )
        manager.register(BasicAuthPlugin(BasicAuthCredentials(username="key")))
        manager.register(BearerAuthPlugin(lambda: "tok"))
        middleware = AuthHeaderMiddleware(manager)

        request = httpx.Request("GET", "https://mock.local/api/v4/transactions/a%2Fb?x=1")
        await middleware.on_request(request)

        assert request.headers["Authorization"].startswith("Basic ")

    def test_response_passthrough(self) -> None:
        middleware = AuthHeaderMiddleware(AuthManager())
        request = httpx.Request("GET", "https://mock.local/")
        response = httpx.Response(200, request=request)
        assert middleware.on_response(request, response) is response
