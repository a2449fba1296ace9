"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde (credenciales, ficheros de batch) sin
  acoplar el Core a librerías de I/O.
- Los descriptores de request son inmutables (`frozen`): se construyen una
  vez y el transporte los consume una sola vez.

Nota:
- Estos modelos describen *qué* se envía y *qué* se devuelve, no *cómo*.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.errors import UnsupportedResource


class ResourceKind(str, Enum):
    """Categorías de la API expuestas por el nodo."""

    ACCOUNTS = "accounts"
    TRANSACTIONS = "transactions"
    TRC20_TOKENS = "trc20Tokens"
    BLOCKS = "blocks"
    SMART_CONTRACTS = "smartContracts"

    @classmethod
    def parse(cls, value: "ResourceKind | str") -> "ResourceKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedResource(str(value)) from None


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class BodyEncoding(str, Enum):
    """Convención de serialización de cada operación.

    - NATIVE: el builder entrega un mapping y el transporte lo serializa
      (y parsea la respuesta JSON).
    - PRE_SERIALIZED: el builder entrega el JSON ya serializado como string y
      la respuesta llega como texto que hay que parsear.
    """

    NATIVE = "native"
    PRE_SERIALIZED = "pre_serialized"


class Credentials(BaseModel):
    """Credenciales resueltas una vez por batch."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        ...,
        min_length=1,
        description="URL base del nodo/TronGrid (sin barra final).",
    )
    api_key: str = Field(
        default="",
        description="Valor de la cabecera TRON-PRO-API-KEY (puede ser vacío).",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value


class OperationRequest(BaseModel):
    """Descriptor completo de una request saliente."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    url: str = Field(..., min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | dict[str, Any] | None = None
    query: dict[str, Any] | None = None
    encoding: BodyEncoding = BodyEncoding.NATIVE

    def redacted(self) -> dict[str, Any]:
        """Vista serializable con la API key ocultada (para dry-runs y logs)."""

        data = self.model_dump(mode="json")
        headers = dict(data.get("headers") or {})
        if headers.get("TRON-PRO-API-KEY"):
            headers["TRON-PRO-API-KEY"] = "***"
        data["headers"] = headers
        return data


class PairedItem(BaseModel):
    item: int = Field(..., ge=0)


class ItemResult(BaseModel):
    """Resultado de un item, en el formato que espera el host.

    El JSON de un fallo absorbido es exactamente `{"error": mensaje}`.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: dict[str, Any] = Field(default_factory=dict, alias="json")
    paired_item: PairedItem = Field(..., alias="pairedItem")
    is_error: bool = Field(default=False, exclude=True)

    @classmethod
    def success(cls, response: Any, index: int) -> "ItemResult":
        data = response if isinstance(response, dict) else {"data": response}
        return cls(data=data, paired_item=PairedItem(item=index))

    @classmethod
    def failure(cls, index: int, message: str) -> "ItemResult":
        return cls(data={"error": message}, paired_item=PairedItem(item=index), is_error=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class BatchContext(BaseModel):
    """Valores leídos una sola vez por batch (desde el item 0)."""

    model_config = ConfigDict(frozen=True)

    resource: ResourceKind
    operation: str
    continue_on_fail: bool = False
