"""Wrapper de httpx y transporte HTTP del nodo.

Por qué un wrapper:
- Estandariza timeouts, headers y manejo de errores para todas las operaciones.
- Facilita testeo: se puede inyectar un `httpx.AsyncClient` con `MockTransport`.

Las dos convenciones de body (`BodyEncoding`) se normalizan aquí: quien llama
siempre recibe datos ya parseados, y los bytes enviados son exactamente los
que produjo el builder.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from core.config import AppSettings
from core.domain.errors import UpstreamApiError
from core.domain.models import BodyEncoding, OperationRequest

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las operaciones se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def parse_response_text(value: Any) -> Any:
    """Parsea respuestas que llegan como texto; lo ya estructurado pasa tal cual."""

    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if not isinstance(value, str):
        return value
    if not value.strip():
        return {}
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise UpstreamApiError(f"Malformed JSON response: {exc}") from exc


def _error_detail(payload: Any) -> str | None:
    if isinstance(payload, dict):
        for key in ("error", "Error", "message", "msg"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    if isinstance(payload, str) and payload.strip():
        return payload.strip()[:500]
    return None


def _raise_for_status(response: httpx.Response) -> None:
    if not response.is_error:
        return
    try:
        payload: Any = response.json()
    except ValueError:
        payload = response.text
    detail = _error_detail(payload) or response.reason_phrase or "request failed"
    raise UpstreamApiError(
        f"TRON API error ({response.status_code}): {detail}",
        status_code=response.status_code,
        payload=payload,
    )


class HttpxTransport:
    """Implementación de `HttpTransport` sobre httpx.

    Si no se inyecta un cliente, se crea uno por request (como el resto de
    adaptadores); inyectarlo permite reutilizar conexiones en un batch.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    async def send(self, request: OperationRequest) -> Any:
        kwargs: dict[str, Any] = {"headers": request.headers}
        if isinstance(request.body, str):
            kwargs["content"] = request.body.encode("utf-8")
        elif request.body is not None:
            kwargs["json"] = request.body

        logger.debug("%s %s", request.method.value, request.url)
        try:
            if self._client is not None:
                response = await self._client.request(request.method.value, request.url, **kwargs)
            else:
                async with build_async_client(self._settings) as client:
                    response = await client.request(request.method.value, request.url, **kwargs)
        # InvalidURL no hereda de HTTPError; una API key no ASCII falla al codificar cabeceras.
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            raise UpstreamApiError(f"Request to {request.url} failed: {exc}") from exc

        _raise_for_status(response)

        if request.encoding is BodyEncoding.PRE_SERIALIZED:
            return parse_response_text(response.text)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamApiError(f"Malformed JSON response: {exc}") from exc
