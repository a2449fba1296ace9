"""Contrato del transporte HTTP.

Por qué Protocol:
- El Core construye descriptores de request pero no sabe cómo se envían.
- Permite sustituir httpx por un doble de test sin herencia rígida.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from core.domain.models import OperationRequest


@runtime_checkable
class HttpTransport(Protocol):
    """Ejecuta un `OperationRequest` y devuelve datos ya parseados.

    Reglas de diseño:
    - `send` es asíncrono: cada item suspende en su llamada de red.
    - Cualquier fallo de red/HTTP/parseo se eleva como `UpstreamApiError`.
    """

    async def send(self, request: OperationRequest) -> Any:
        ...
