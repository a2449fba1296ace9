"""
Tests for dispatch, per-item processing and the resource router.

Covers:
  - dispatch() lookups and UnknownOperation
  - Ordering and pairedItem indices
  - continue-on-fail isolation vs abort-on-fail
  - Configuration errors are never absorbed
  - resource/operation read once, other parameters read per item
"""

from __future__ import annotations

import pytest

from core.domain.errors import (
    ItemProcessingError,
    MissingRequiredParameter,
    UnknownOperation,
    UnsupportedResource,
    UpstreamApiError,
)
from core.domain.models import BatchContext, ItemResult, ResourceKind
from core.services.dispatcher import dispatch, supported_operations
from core.services.item_processor import process_batch
from core.services.parameters import ItemParameterSource, resolve_batch_context
from core.services.router import execute


class TestDispatch:

    def test_known_operation(self):
        entry = dispatch(ResourceKind.ACCOUNTS, "getAccount")
        assert entry.name == "getAccount"
        assert entry.resource is ResourceKind.ACCOUNTS

    def test_accepts_resource_string(self):
        assert dispatch("blocks", "getCurrentBlock").name == "getCurrentBlock"

    def test_unknown_operation(self):
        with pytest.raises(UnknownOperation) as info:
            dispatch(ResourceKind.ACCOUNTS, "bogusOp")
        assert info.value.operation == "bogusOp"
        assert str(info.value) == "Unknown operation: bogusOp"

    def test_operation_scoped_to_resource(self):
        with pytest.raises(UnknownOperation):
            dispatch(ResourceKind.ACCOUNTS, "getCurrentBlock")

    def test_unsupported_resource(self):
        with pytest.raises(UnsupportedResource):
            dispatch("utility", "toSun")

    def test_supported_operations(self):
        names = [entry.name for entry in supported_operations("blocks")]
        assert names == ["getCurrentBlock", "getBlockByNumber", "getBlockById", "getLatestBlocks", "getBlock"]


def _context(operation="getAccount", continue_on_fail=False, resource=ResourceKind.ACCOUNTS):
    return BatchContext(resource=resource, operation=operation, continue_on_fail=continue_on_fail)


def _rows(n):
    return [{"address": f"T{i}"} for i in range(n)]


class TestProcessBatch:

    async def test_ordering_and_pairing(self, credentials, make_transport):
        rows = _rows(4)
        transport = make_transport([{"n": i} for i in range(4)])
        results = await process_batch(_context(), rows, ItemParameterSource({}, rows), credentials, transport)

        assert len(results) == 4
        for index, result in enumerate(results):
            assert result.paired_item.item == index
            assert result.data == {"n": index}
        assert [r.url.rsplit("/", 1)[-1] for r in transport.requests] == ["T0", "T1", "T2", "T3"]

    async def test_continue_on_fail_isolation(self, credentials, make_transport, upstream_error):
        rows = _rows(3)
        transport = make_transport([{"n": 0}, upstream_error, {"n": 2}])
        results = await process_batch(
            _context(continue_on_fail=True), rows, ItemParameterSource({}, rows), credentials, transport
        )

        assert [r.to_wire() for r in results] == [
            {"json": {"n": 0}, "pairedItem": {"item": 0}},
            {"json": {"error": "API Error"}, "pairedItem": {"item": 1}},
            {"json": {"n": 2}, "pairedItem": {"item": 2}},
        ]
        assert len(transport.requests) == 3

    async def test_abort_on_fail(self, credentials, make_transport, upstream_error):
        rows = _rows(3)
        transport = make_transport([{"n": 0}, upstream_error, {"n": 2}])
        with pytest.raises(ItemProcessingError) as info:
            await process_batch(_context(), rows, ItemParameterSource({}, rows), credentials, transport)

        assert info.value.item_index == 1
        assert info.value.cause is upstream_error
        assert "API Error" in str(info.value)
        # the third item is never sent
        assert len(transport.requests) == 2

    async def test_missing_parameter_recorded_when_continuing(self, credentials, transport):
        rows = [{"address": "T0"}, {}]
        results = await process_batch(
            _context(continue_on_fail=True), rows, ItemParameterSource({}, rows), credentials, transport
        )
        assert results[1].data == {"error": "Missing required parameter: address"}
        assert results[1].is_error
        assert len(transport.requests) == 1

    async def test_missing_parameter_aborts_by_default(self, credentials, transport):
        rows = [{}]
        with pytest.raises(ItemProcessingError) as info:
            await process_batch(_context(), rows, ItemParameterSource({}, rows), credentials, transport)
        assert isinstance(info.value.cause, MissingRequiredParameter)

    async def test_unknown_operation_never_absorbed(self, credentials, transport):
        rows = _rows(2)
        with pytest.raises(UnknownOperation):
            await process_batch(
                _context(operation="bogusOp", continue_on_fail=True),
                rows,
                ItemParameterSource({}, rows),
                credentials,
                transport,
            )
        assert transport.requests == []

    async def test_non_mapping_response_wrapped(self, credentials, make_transport):
        rows = _rows(1)
        transport = make_transport([[1, 2, 3]])
        results = await process_batch(_context(), rows, ItemParameterSource({}, rows), credentials, transport)
        assert results[0].data == {"data": [1, 2, 3]}


class TestBatchContext:

    def test_read_from_first_item_only(self):
        source = ItemParameterSource(
            {"resource": "accounts"},
            [{"operation": "getAccount"}, {"operation": "getAccountInfo"}],
        )
        context = resolve_batch_context(source)
        assert context.resource is ResourceKind.ACCOUNTS
        assert context.operation == "getAccount"

    def test_explicit_resource_wins(self):
        source = ItemParameterSource({"resource": "accounts", "operation": "getCurrentBlock"}, [{}])
        context = resolve_batch_context(source, resource="blocks")
        assert context.resource is ResourceKind.BLOCKS

    def test_snake_case_parameter_lookup(self):
        source = ItemParameterSource({}, [{"owner_address": "O"}])
        assert source.get("ownerAddress", 0) == "O"

    def test_item_overrides_defaults(self):
        source = ItemParameterSource({"limit": 20}, [{}, {"limit": 5}])
        assert source.get("limit", 0) == 20
        assert source.get("limit", 1) == 5
        assert source.get("missing", 1, "x") == "x"


class TestExecute:

    async def test_operation_read_once_for_whole_batch(self, credentials, transport):
        rows = [
            {"operation": "getAccount", "address": "A"},
            {"operation": "getAccountInfo", "address": "B"},
        ]
        results = await execute(rows, ItemParameterSource({"resource": "accounts"}, rows), credentials, transport)

        assert len(results) == 2
        assert [r.url for r in transport.requests] == [
            "https://api.trongrid.io/v1/accounts/A",
            "https://api.trongrid.io/v1/accounts/B",
        ]

    async def test_unsupported_resource(self, credentials, transport):
        rows = [{}]
        with pytest.raises(UnsupportedResource):
            await execute(rows, ItemParameterSource({"resource": "utility"}, rows), credentials, transport)
        assert transport.requests == []

    async def test_unsupported_resource_with_empty_batch(self, credentials, transport):
        with pytest.raises(UnsupportedResource):
            await execute([], ItemParameterSource({}, []), credentials, transport, resource="nope")

    async def test_empty_batch(self, credentials, transport):
        results = await execute([], ItemParameterSource({}, []), credentials, transport, resource="blocks")
        assert results == []

    async def test_continue_on_fail_flag(self, credentials, make_transport):
        rows = [{}, {}]
        transport = make_transport([UpstreamApiError("Block not found"), {"blockID": "x"}])
        results = await execute(
            rows,
            ItemParameterSource({"operation": "getCurrentBlock"}, rows),
            credentials,
            transport,
            resource=ResourceKind.BLOCKS,
            continue_on_fail=True,
        )
        assert results == [
            ItemResult.failure(0, "Block not found"),
            ItemResult.success({"blockID": "x"}, 1),
        ]


class TestUnexpectedTransportErrors:

    async def test_recorded_inline_when_continuing(self, credentials, make_transport):
        rows = _rows(3)
        transport = make_transport([{"n": 0}, ConnectionResetError("peer reset"), {"n": 2}])
        results = await process_batch(
            _context(continue_on_fail=True), rows, ItemParameterSource({}, rows), credentials, transport
        )

        assert [r.is_error for r in results] == [False, True, False]
        assert results[1].data == {"error": "peer reset"}
        assert len(transport.requests) == 3

    async def test_wrapped_with_item_index_when_aborting(self, credentials, make_transport):
        rows = _rows(3)
        cause = ConnectionResetError("peer reset")
        transport = make_transport([{"n": 0}, cause])
        with pytest.raises(ItemProcessingError) as info:
            await process_batch(_context(), rows, ItemParameterSource({}, rows), credentials, transport)

        assert info.value.item_index == 1
        assert info.value.cause is cause
        assert len(transport.requests) == 2
