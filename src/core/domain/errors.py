"""Taxonomía de errores del nodo.

Por qué una jerarquía propia:
- El procesador de items necesita distinguir errores de configuración
  (siempre fatales para el batch) de fallos recuperables por item.
- La CLI puede capturar `TronNodeError` en un único punto.
"""

from __future__ import annotations

from typing import Any


class TronNodeError(Exception):
    """Raíz de todos los errores del nodo."""


class ConfigurationError(TronNodeError):
    """Configuración inválida: nunca se absorbe con continue-on-fail."""


class UnknownOperation(ConfigurationError):
    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Unknown operation: {operation}")


class UnsupportedResource(ConfigurationError):
    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"The resource {resource!r} is not supported")


class MissingRequiredParameter(TronNodeError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing required parameter: {name}")


class InvalidParameterValue(TronNodeError):
    def __init__(self, name: str, value: Any, expected: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Parameter {name!r} must be {expected}, got {value!r}")


class UpstreamApiError(TronNodeError):
    """Fallo del transporte: red, status no-2xx o cuerpo malformado."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)


class ItemProcessingError(TronNodeError):
    """Aborta el batch completo señalando el item que falló."""

    def __init__(self, item_index: int, cause: BaseException) -> None:
        self.item_index = item_index
        self.cause = cause
        super().__init__(f"Item {item_index}: {cause}")
