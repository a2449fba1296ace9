"""Carga de ficheros de batch (JSON).

Formato:

    {
      "resource": "accounts",
      "operation": "getAccount",
      "continueOnFail": false,
      "parameters": {"limit": 20},
      "items": [{"address": "T..."}, {"address": "T..."}]
    }

`parameters` son los valores de nodo; cada fila de `items` los sobrescribe
para ese item. `resource`/`operation` pueden venir también en `parameters`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.services.node import BatchRequest


class BatchFile(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    resource: str | None = None
    operation: str | None = None
    continue_on_fail: bool | None = Field(default=None, alias="continueOnFail")
    parameters: dict[str, Any] = Field(default_factory=dict)
    items: list[dict[str, Any]] = Field(default_factory=lambda: [{}])

    def to_request(
        self,
        *,
        resource: str | None = None,
        operation: str | None = None,
        continue_on_fail: bool | None = None,
    ) -> BatchRequest:
        parameters = dict(self.parameters)
        if operation or self.operation:
            parameters["operation"] = operation or self.operation
        return BatchRequest(
            items=self.items,
            parameters=parameters,
            resource=resource or self.resource,
            continue_on_fail=self.continue_on_fail if continue_on_fail is None else continue_on_fail,
        )


def load_batch(path: Path) -> BatchFile:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if isinstance(data, list):
        # Lista plana de filas: resource/operation llegan por flags.
        data = {"items": data}
    return BatchFile.model_validate(data)
