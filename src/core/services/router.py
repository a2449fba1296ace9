"""Punto de entrada del Core: selecciona el recurso una vez por batch."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from core.domain.models import Credentials, ItemResult, ResourceKind
from core.interfaces.parameters import ParameterSource
from core.interfaces.transport import HttpTransport
from core.services.item_processor import process_batch
from core.services.parameters import resolve_batch_context

logger = logging.getLogger(__name__)


async def execute(
    items: Sequence[Any],
    parameters: ParameterSource,
    credentials: Credentials,
    transport: HttpTransport,
    *,
    resource: ResourceKind | str | None = None,
    continue_on_fail: bool = False,
) -> list[ItemResult]:
    """Ejecuta el batch completo.

    `resource` y `operation` se resuelven una sola vez (item 0, o el
    `resource` explícito); el resto de parámetros se resuelve por item.
    Eleva `UnsupportedResource` antes de procesar ningún item.
    """

    context = resolve_batch_context(
        parameters,
        resource=resource,
        continue_on_fail=continue_on_fail,
    )
    if not items:
        return []
    logger.info(
        "executing %s.%s on %d item(s)",
        context.resource.value,
        context.operation,
        len(items),
    )
    return await process_batch(context, items, parameters, credentials, transport)
