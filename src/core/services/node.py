"""Fachada del nodo para entry-points (CLI, jobs, tests).

Agrupa configuración, credenciales y transporte para que quien llama solo
tenga que aportar el batch. Mantiene los side-effects (banner, consola)
fuera del Core.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from adapters.http_client import HttpxTransport
from core.config import AppSettings, resolve_credentials
from core.domain.models import Credentials, ItemResult, ResourceKind
from core.interfaces.transport import HttpTransport
from core.services.parameters import ItemParameterSource
from core.services.router import execute


@dataclass
class BatchRequest:
    """Entrada de una ejecución: parámetros de nodo + filas por item."""

    items: Sequence[Mapping[str, Any]]
    parameters: Mapping[str, Any] = field(default_factory=dict)
    resource: ResourceKind | str | None = None
    continue_on_fail: bool | None = None


class TronNode:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        credentials: Credentials | None = None,
        transport: HttpTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._credentials = credentials
        self._transport = transport or HttpxTransport(self._settings)

    async def execute(self, batch: BatchRequest) -> list[ItemResult]:
        credentials = self._credentials or resolve_credentials(self._settings)
        continue_on_fail = (
            self._settings.continue_on_fail
            if batch.continue_on_fail is None
            else batch.continue_on_fail
        )
        source = ItemParameterSource(batch.parameters, batch.items)
        return await execute(
            batch.items,
            source,
            credentials,
            self._transport,
            resource=batch.resource,
            continue_on_fail=continue_on_fail,
        )
