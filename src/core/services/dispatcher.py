"""Selección de la operación dentro de un recurso."""

from __future__ import annotations

from core.domain.errors import UnknownOperation
from core.domain.models import ResourceKind
from core.services.operations import OPERATIONS, OperationEntry


def dispatch(resource: ResourceKind | str, operation: str) -> OperationEntry:
    """Devuelve la entrada de la tabla o eleva `UnknownOperation`.

    El procesador la invoca por item aunque `operation` sea constante en el
    batch: así el fallo aparece en el primer item sin pre-escanear nada.
    """

    kind = ResourceKind.parse(resource)
    entry = OPERATIONS[kind].get(operation)
    if entry is None:
        raise UnknownOperation(operation)
    return entry


def supported_operations(resource: ResourceKind | str) -> list[OperationEntry]:
    return list(OPERATIONS[ResourceKind.parse(resource)].values())
