"""Construcción de requests: (recurso, operación, parámetros) -> `OperationRequest`.

Función pura: sin I/O y sin mutar los parámetros de entrada.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from core.domain.models import BodyEncoding, Credentials, OperationRequest, ResourceKind
from core.services.dispatcher import dispatch
from core.services.operations import OperationEntry
from core.services.parameters import ItemParameterSource, ParameterSet

API_KEY_HEADER = "TRON-PRO-API-KEY"


def serialize_body(body: Any) -> str:
    """Serialización compacta usada por las operaciones `PRE_SERIALIZED`."""

    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_url(base_url: str, path: str, query: dict[str, Any] | None) -> str:
    url = f"{base_url.rstrip('/')}{path}"
    if query:
        url = f"{url}?{urlencode({k: _query_value(v) for k, v in query.items()})}"
    return url


def build_from_entry(
    entry: OperationEntry,
    params: ParameterSet,
    credentials: Credentials,
) -> OperationRequest:
    draft = entry.draft(params)

    headers = {API_KEY_HEADER: credentials.api_key or ""}
    body: str | dict[str, Any] | None = None
    if draft.body is not None:
        headers["Content-Type"] = "application/json"
        if entry.encoding is BodyEncoding.PRE_SERIALIZED:
            body = serialize_body(draft.body)
        else:
            body = dict(draft.body)

    return OperationRequest(
        method=draft.method,
        url=render_url(credentials.base_url, draft.path, draft.query),
        headers=headers,
        body=body,
        query=dict(draft.query) if draft.query else None,
        encoding=entry.encoding,
    )


def build(
    resource: ResourceKind | str,
    operation: str,
    params: ParameterSet | Mapping[str, Any],
    credentials: Credentials,
) -> OperationRequest:
    if not isinstance(params, ParameterSet):
        params = ParameterSet(ItemParameterSource(params), 0)
    return build_from_entry(dispatch(resource, operation), params, credentials)
