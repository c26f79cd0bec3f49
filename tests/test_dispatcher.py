"""Tests for the operation dispatcher."""

from __future__ import annotations

import threading
from unittest.mock import patch

import pytest

import trustap.dispatcher as dispatcher_module
from trustap.catalog import OPERATION_ID_TO_PATH
from trustap.dispatcher import OperationDispatcher, OperationHandler
from trustap.exceptions import InvalidUsageError, UnsupportedMethodError
from trustap.models import HTTPMethod, OperationMapping


def _dispatcher(transport, operations=None, base_path: str = "/api/v4", **kwargs) -> OperationDispatcher:
    return OperationDispatcher(transport, operations or OPERATION_ID_TO_PATH, base_path, **kwargs)


# ---------------------------------------------------------------------------
# Lookup and caching
# ---------------------------------------------------------------------------


class TestLookup:
    def test_known_operation(self, transport) -> None:
        handler = _dispatcher(transport)["basic.getCharge"]
        assert isinstance(handler, OperationHandler)
        assert handler.method is HTTPMethod.GET
        assert handler.template.path == "/api/v4/charge"

    def test_unknown_operation_is_none(self, transport) -> None:
        dispatcher = _dispatcher(transport)
        assert dispatcher["nonexistent.op"] is None
        assert dispatcher.get("nonexistent.op") is None

    def test_handlers_are_memoized(self, transport) -> None:
        dispatcher = _dispatcher(transport)
        assert dispatcher["oauth.getUser"] is dispatcher["oauth.getUser"]

    def test_template_compiled_once(self, transport) -> None:
        dispatcher = _dispatcher(transport)
        with patch.object(
            dispatcher_module,
            "compile_path_template",
            wraps=dispatcher_module.compile_path_template,
        ) as compiler:
            for _ in range(5):
                dispatcher["oauth.getUser"]
        assert compiler.call_count == 1

    def test_concurrent_first_access_builds_once(self, transport) -> None:
        dispatcher = _dispatcher(transport)
        results: list[OperationHandler] = []
        barrier = threading.Barrier(8)

        def access() -> None:
            barrier.wait()
            results.append(dispatcher["basic.createTransaction"])

        threads = [threading.Thread(target=access) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(handler) for handler in results}) == 1

    def test_mapping_models_accepted(self, transport) -> None:
        operations = {"custom.op": OperationMapping(path="/custom", method="delete")}
        handler = _dispatcher(transport, operations)["custom.op"]
        assert handler.method is HTTPMethod.DELETE

    def test_container_protocol(self, transport) -> None:
        dispatcher = _dispatcher(transport)
        assert "basic.getCharge" in dispatcher
        assert "nonexistent.op" not in dispatcher
        assert len(dispatcher) == len(OPERATION_ID_TO_PATH)
        assert set(dispatcher) == set(OPERATION_ID_TO_PATH)
        assert dispatcher.keys() == list(OPERATION_ID_TO_PATH)


class TestUnsupportedMethod:
    def test_raised_at_construction(self, transport) -> None:
        dispatcher = _dispatcher(transport, {"bad.op": {"path": "/x", "method": "TRACE"}})
        with pytest.raises(UnsupportedMethodError, match="Unsupported method TRACE for bad.op") as exc_info:
            dispatcher["bad.op"]
        assert exc_info.value.operation_id == "bad.op"
        assert exc_info.value.method == "TRACE"

    def test_preload_surfaces_errors(self, transport) -> None:
        dispatcher = _dispatcher(
            transport,
            {
                "good.op": {"path": "/x", "method": "get"},
                "bad.op": {"path": "/y", "method": "connect"},
            },
        )
        with pytest.raises(UnsupportedMethodError):
            dispatcher.preload()

    def test_preload_builds_everything(self, transport) -> None:
        dispatcher = _dispatcher(transport)
        dispatcher.preload()
        assert set(dispatcher._handlers) == set(OPERATION_ID_TO_PATH)


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


class TestInvoke:
    @pytest.mark.asyncio
    async def test_get_with_query(self, transport, charge_query) -> None:
        await _dispatcher(transport)["basic.getCharge"](params={"query": charge_query})

        record = transport.requests[0]
        assert record.method == "GET"
        assert record.path == "/api/v4/charge"
        assert record.options == {"params": {"query": charge_query}}

    @pytest.mark.asyncio
    async def test_path_params_applied(self, transport) -> None:
        await _dispatcher(transport)["oauth.updateUser"](
            {"params": {"path": {"userId": "user 1"}}, "body": {"name": "Ann"}}
        )

        record = transport.requests[0]
        assert record.method == "PUT"
        assert record.path == "/api/v4/users/user%201"
        assert record.options["body"] == {"name": "Ann"}

    @pytest.mark.asyncio
    async def test_missing_path_param_left_in_path(self, transport) -> None:
        await _dispatcher(transport)["oauth.getUser"]()
        assert transport.requests[0].path == "/api/v4/users/{userId}"

    @pytest.mark.asyncio
    async def test_positional_and_keyword_options_merge(self, transport, carrier_facility_request) -> None:
        await _dispatcher(transport)["basic.getCarrierFacilityOptions"](
            {"body": carrier_facility_request},
            params={"path": {"carrier_id": "carrier_1"}},
        )

        record = transport.requests[0]
        assert record.method == "POST"
        assert record.path == "/api/v4/carriers/carrier_1/facility_options"
        assert record.options["body"] == carrier_facility_request

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "operation_id, method",
        [
            ("basic.getCharge", "GET"),
            ("basic.createTransaction", "POST"),
            ("basic.joinTransaction", "PUT"),
            ("basic.updateTransactionDescription", "PATCH"),
            ("basic.removeTrackingDetails", "DELETE"),
        ],
    )
    async def test_verb_routing(self, transport, operation_id: str, method: str) -> None:
        await _dispatcher(transport)[operation_id](params={"path": {"transactionId": 1}})
        assert transport.requests[0].method == method

    @pytest.mark.asyncio
    async def test_head_and_options_verbs(self, transport) -> None:
        operations = {
            "probe.head": {"path": "/probe", "method": "head"},
            "probe.options": {"path": "/probe", "method": "OPTIONS"},
        }
        dispatcher = _dispatcher(transport, operations)
        await dispatcher["probe.head"]()
        await dispatcher["probe.options"]()
        assert [r.method for r in transport.requests] == ["HEAD", "OPTIONS"]

    @pytest.mark.asyncio
    async def test_legacy_query_normalized(self, transport, charge_query) -> None:
        with pytest.warns(DeprecationWarning):
            await _dispatcher(transport)["basic.getCharge"](query=charge_query)
        assert transport.requests[0].options == {"params": {"query": charge_query}}

    @pytest.mark.asyncio
    async def test_legacy_query_rejected_when_disabled(self, transport, charge_query) -> None:
        dispatcher = _dispatcher(transport, allow_legacy_query=False)
        with pytest.raises(InvalidUsageError):
            await dispatcher["basic.getCharge"](query=charge_query)
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_empty_base_path(self, transport) -> None:
        await _dispatcher(transport, base_path="")["basic.getCharge"]()
        assert transport.requests[0].path == "/charge"

    @pytest.mark.asyncio
    async def test_returns_transport_result(self, transport) -> None:
        transport.set_response("/api/v4/charge", "GET", data={"charge": 78})
        result = await _dispatcher(transport)["basic.getCharge"]()
        assert result.data == {"charge": 78}
