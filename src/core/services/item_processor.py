"""Procesado secuencial de un batch de items.

Reglas:
- Un item cada vez: la llamada de red de un item termina (éxito o fallo)
  antes de leer los parámetros del siguiente.
- El orden de salida es el de entrada, con las entradas de error
  intercaladas cuando continue-on-fail está activo.
- Los errores de configuración nunca se absorben. Cualquier otro fallo
  de un item se registra en línea o aborta indicando su índice.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from core.domain.errors import ConfigurationError, ItemProcessingError
from core.domain.models import BatchContext, Credentials, ItemResult
from core.interfaces.parameters import ParameterSource
from core.interfaces.transport import HttpTransport
from core.services.dispatcher import dispatch
from core.services.parameters import ParameterSet
from core.services.request_builder import build_from_entry

logger = logging.getLogger(__name__)


async def process_item(
    context: BatchContext,
    index: int,
    parameters: ParameterSource,
    credentials: Credentials,
    transport: HttpTransport,
) -> ItemResult:
    entry = dispatch(context.resource, context.operation)
    request = build_from_entry(entry, ParameterSet(parameters, index), credentials)
    logger.debug("item %d: %s %s", index, request.method.value, request.url)
    response = await transport.send(request)
    return ItemResult.success(response, index)


async def process_batch(
    context: BatchContext,
    items: Sequence[Any],
    parameters: ParameterSource,
    credentials: Credentials,
    transport: HttpTransport,
) -> list[ItemResult]:
    results: list[ItemResult] = []
    for index in range(len(items)):
        try:
            results.append(await process_item(context, index, parameters, credentials, transport))
        except ConfigurationError:
            raise
        except Exception as exc:
            if not context.continue_on_fail:
                raise ItemProcessingError(index, exc) from exc
            logger.warning("item %d failed, continuing: %s", index, exc)
            results.append(ItemResult.failure(index, str(exc)))
    return results
