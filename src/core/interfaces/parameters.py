"""Contrato de resolución de parámetros por item."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ParameterSource(Protocol):
    """Resuelve el valor de un parámetro para un item concreto.

    Cada parámetro se resuelve de forma independiente por item, lo que
    permite batches heterogéneos (p.ej. una `address` distinta por fila).
    """

    def get(self, name: str, item_index: int, default: Any = None) -> Any:
        ...
