"""Tabla de operaciones por recurso.

Cada entrada asocia el nombre de la operación con:
- la función que traduce parámetros a (método, path, body, query), y
- su `BodyEncoding` (ver `core.domain.models.BodyEncoding`).

Los bodies de `/wallet/...` usan las claves snake_case de la API del nodo,
aunque en el borde los parámetros lleguen en camelCase.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import quote

from core.domain.models import BodyEncoding, HttpMethod, ResourceKind
from core.services.parameters import ParameterSet


@dataclass(frozen=True)
class RequestDraft:
    method: HttpMethod
    path: str
    body: dict[str, Any] | None = None
    query: dict[str, Any] | None = None


DraftBuilder = Callable[[ParameterSet], RequestDraft]


@dataclass(frozen=True)
class OperationEntry:
    resource: ResourceKind
    name: str
    draft: DraftBuilder
    encoding: BodyEncoding = BodyEncoding.NATIVE
    description: str = ""


def _segment(value: str) -> str:
    return quote(value, safe="")


def _put(target: dict[str, Any], key: str, value: Any) -> None:
    """Añade `key` solo si el valor no es vacío/cero/falso."""

    if value is None or value is False or value == "" or value == 0:
        return
    target[key] = value


def _pagination(params: ParameterSet, *, confirmed_filters: bool = False) -> dict[str, Any]:
    query: dict[str, Any] = {}
    _put(query, "limit", params.integer("limit"))
    _put(query, "fingerprint", params.string("fingerprint"))
    if confirmed_filters:
        _put(query, "only_confirmed", params.boolean("onlyConfirmed"))
        _put(query, "only_to", params.boolean("onlyTo"))
        _put(query, "only_from", params.boolean("onlyFrom"))
    return query


def _wallet(path: str, body: dict[str, Any], params: ParameterSet) -> RequestDraft:
    _put(body, "visible", params.boolean("visible"))
    return RequestDraft(HttpMethod.POST, f"/wallet/{path}", body=body)


def _contract_call_body(params: ParameterSet, *, with_fees: bool) -> dict[str, Any]:
    body: dict[str, Any] = {
        "contract_address": params.require_string("contractAddress"),
        "function_selector": params.require_string("functionSelector"),
    }
    _put(body, "parameter", params.string("parameter"))
    body["owner_address"] = params.require_string("ownerAddress")
    if with_fees:
        _put(body, "fee_limit", params.integer("feeLimit"))
        _put(body, "call_value", params.integer("callValue"))
    return body


# --- Accounts -------------------------------------------------------------


def _get_account(params: ParameterSet) -> RequestDraft:
    address = params.require_string("address")
    return RequestDraft(HttpMethod.GET, f"/v1/accounts/{_segment(address)}")


def _get_account_transactions(params: ParameterSet) -> RequestDraft:
    address = params.require_string("address")
    query = _pagination(params, confirmed_filters=True)
    _put(query, "search_internal", params.boolean("searchInternal"))
    return RequestDraft(
        HttpMethod.GET,
        f"/v1/accounts/{_segment(address)}/transactions",
        query=query or None,
    )


def _get_account_info(params: ParameterSet) -> RequestDraft:
    return _wallet("getaccount", {"address": params.require_string("address")}, params)


def _get_account_resources(params: ParameterSet) -> RequestDraft:
    return _wallet("getaccountresource", {"address": params.require_string("address")}, params)


# --- Transactions ---------------------------------------------------------


def _create_transaction(params: ParameterSet) -> RequestDraft:
    body = {
        "to_address": params.require_string("toAddress"),
        "owner_address": params.require_string("ownerAddress"),
        "amount": params.require_integer("amount"),
    }
    return _wallet("createtransaction", body, params)


def _broadcast_transaction(params: ParameterSet) -> RequestDraft:
    body: dict[str, Any] = {}
    _put(body, "txID", params.string("txId"))
    body["raw_data"] = params.require_raw("rawData")
    _put(body, "raw_data_hex", params.string("rawDataHex"))
    body["signature"] = params.require_raw("signature")
    return _wallet("broadcasttransaction", body, params)


def _get_transaction(params: ParameterSet) -> RequestDraft:
    tx_hash = params.require_string("hash")
    return RequestDraft(HttpMethod.GET, f"/v1/transactions/{_segment(tx_hash)}")


def _get_transaction_by_id(params: ParameterSet) -> RequestDraft:
    return _wallet("gettransactionbyid", {"value": params.require_string("value")}, params)


def _get_transaction_info(params: ParameterSet) -> RequestDraft:
    return _wallet("gettransactioninfobyid", {"value": params.require_string("value")}, params)


# --- TRC-20 tokens --------------------------------------------------------


def _trigger_smart_contract(params: ParameterSet) -> RequestDraft:
    return _wallet("triggersmartcontract", _contract_call_body(params, with_fees=True), params)


def _constant_call(params: ParameterSet) -> RequestDraft:
    return _wallet("triggerconstantcontract", _contract_call_body(params, with_fees=False), params)


def _get_trc20_transactions(params: ParameterSet) -> RequestDraft:
    address = params.require_string("address")
    query: dict[str, Any] = {}
    _put(query, "contract_address", params.string("contractAddress"))
    query.update(_pagination(params, confirmed_filters=True))
    return RequestDraft(
        HttpMethod.GET,
        f"/v1/accounts/{_segment(address)}/transactions/trc20",
        query=query or None,
    )


def _get_contract(params: ParameterSet) -> RequestDraft:
    address = params.require_string("address")
    return RequestDraft(HttpMethod.GET, f"/v1/contracts/{_segment(address)}")


def _get_contract_transactions(params: ParameterSet) -> RequestDraft:
    address = params.require_string("address")
    query = _pagination(params, confirmed_filters=True)
    return RequestDraft(
        HttpMethod.GET,
        f"/v1/contracts/{_segment(address)}/transactions",
        query=query or None,
    )


# --- Blocks ---------------------------------------------------------------


def _get_current_block(params: ParameterSet) -> RequestDraft:
    return _wallet("getnowblock", {}, params)


def _get_block_by_number(params: ParameterSet) -> RequestDraft:
    return _wallet("getblockbynum", {"num": params.require_integer("num")}, params)


def _get_block_by_id(params: ParameterSet) -> RequestDraft:
    return _wallet("getblockbyid", {"value": params.require_string("value")}, params)


def _get_latest_blocks(params: ParameterSet) -> RequestDraft:
    query: dict[str, Any] = {}
    _put(query, "limit", params.integer("limit"))
    return RequestDraft(HttpMethod.GET, "/v1/blocks/latest", query=query or None)


def _get_block(params: ParameterSet) -> RequestDraft:
    identifier = params.require_string("identifier")
    return RequestDraft(HttpMethod.GET, f"/v1/blocks/{_segment(identifier)}")


# --- Smart contracts ------------------------------------------------------


def _deploy_contract(params: ParameterSet) -> RequestDraft:
    body: dict[str, Any] = {
        "owner_address": params.require_string("ownerAddress"),
        "abi": params.require_raw("abi"),
        "bytecode": params.require_string("bytecode"),
    }
    _put(body, "parameter", params.string("constructorParameters"))
    _put(body, "name", params.string("name"))
    _put(body, "fee_limit", params.integer("feeLimit"))
    _put(body, "call_value", params.integer("callValue"))
    _put(body, "consume_user_resource_percent", params.integer("consumeUserResourcePercent"))
    _put(body, "origin_energy_limit", params.integer("originEnergyLimit"))
    return _wallet("deploycontract", body, params)


def _get_contract_data(params: ParameterSet) -> RequestDraft:
    return _wallet("getcontract", {"value": params.require_string("value")}, params)


_NATIVE = BodyEncoding.NATIVE
_STRING = BodyEncoding.PRE_SERIALIZED


def _table(
    resource: ResourceKind,
    *rows: tuple[str, DraftBuilder, BodyEncoding, str],
) -> dict[str, OperationEntry]:
    return {
        name: OperationEntry(resource, name, draft, encoding, description)
        for name, draft, encoding, description in rows
    }


OPERATIONS: dict[ResourceKind, dict[str, OperationEntry]] = {
    ResourceKind.ACCOUNTS: _table(
        ResourceKind.ACCOUNTS,
        ("getAccount", _get_account, _NATIVE, "Account overview from the indexed API"),
        ("getAccountTransactions", _get_account_transactions, _NATIVE, "Paginated transaction history"),
        ("getAccountInfo", _get_account_info, _NATIVE, "Raw account state from the full node"),
        ("getAccountResources", _get_account_resources, _NATIVE, "Bandwidth and energy of an account"),
    ),
    ResourceKind.TRANSACTIONS: _table(
        ResourceKind.TRANSACTIONS,
        ("createTransaction", _create_transaction, _STRING, "Create an unsigned TRX transfer"),
        ("broadcastTransaction", _broadcast_transaction, _NATIVE, "Broadcast a signed transaction"),
        ("getTransaction", _get_transaction, _NATIVE, "Transaction by hash from the indexed API"),
        ("getTransactionById", _get_transaction_by_id, _NATIVE, "Transaction by ID from the full node"),
        ("getTransactionInfo", _get_transaction_info, _NATIVE, "Receipt/fee info of a transaction"),
    ),
    ResourceKind.TRC20_TOKENS: _table(
        ResourceKind.TRC20_TOKENS,
        ("triggerSmartContract", _trigger_smart_contract, _STRING, "Build a TRC-20 contract call"),
        ("getTrc20Transactions", _get_trc20_transactions, _NATIVE, "TRC-20 transfers of an account"),
        ("constantCall", _constant_call, _STRING, "Read-only TRC-20 contract call"),
        ("getContract", _get_contract, _NATIVE, "Token contract details"),
        ("getContractTransactions", _get_contract_transactions, _NATIVE, "Transactions of a token contract"),
    ),
    ResourceKind.BLOCKS: _table(
        ResourceKind.BLOCKS,
        ("getCurrentBlock", _get_current_block, _NATIVE, "Latest block from the full node"),
        ("getBlockByNumber", _get_block_by_number, _NATIVE, "Block by height"),
        ("getBlockById", _get_block_by_id, _NATIVE, "Block by block ID"),
        ("getLatestBlocks", _get_latest_blocks, _NATIVE, "Most recent blocks from the indexed API"),
        ("getBlock", _get_block, _NATIVE, "Block by number or hash from the indexed API"),
    ),
    ResourceKind.SMART_CONTRACTS: _table(
        ResourceKind.SMART_CONTRACTS,
        ("deployContract", _deploy_contract, _STRING, "Create an unsigned contract deployment"),
        ("callContract", _trigger_smart_contract, _STRING, "Build a state-changing contract call"),
        ("callConstantContract", _constant_call, _STRING, "Read-only contract call"),
        ("getContractInfo", _get_contract, _STRING, "Contract details from the indexed API"),
        ("getContractData", _get_contract_data, _STRING, "Contract ABI and bytecode from the full node"),
    ),
}
