"""Resolución de parámetros en dos niveles.

- `resource` / `operation` se leen una sola vez (item 0) y forman el
  `BatchContext`.
- El resto de parámetros se resuelve por item mediante `ParameterSet`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from core.domain.errors import InvalidParameterValue, MissingRequiredParameter
from core.domain.models import BatchContext, ResourceKind
from core.interfaces.parameters import ParameterSource

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

_MISSING = object()


def to_snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class ItemParameterSource:
    """Parámetros de nodo (`defaults`) sobrescritos por valores por item."""

    def __init__(
        self,
        defaults: Mapping[str, Any] | None = None,
        per_item: Sequence[Mapping[str, Any]] | None = None,
    ) -> None:
        self._defaults = dict(defaults or {})
        self._per_item = [dict(row) for row in per_item or []]

    def __len__(self) -> int:
        return len(self._per_item)

    @staticmethod
    def _lookup(values: Mapping[str, Any], name: str) -> Any:
        if name in values:
            return values[name]
        snake = to_snake_case(name)
        if snake in values:
            return values[snake]
        return _MISSING

    def get(self, name: str, item_index: int, default: Any = None) -> Any:
        if 0 <= item_index < len(self._per_item):
            value = self._lookup(self._per_item[item_index], name)
            if value is not _MISSING:
                return value
        value = self._lookup(self._defaults, name)
        return default if value is _MISSING else value


def resolve_batch_context(
    source: ParameterSource,
    *,
    resource: ResourceKind | str | None = None,
    continue_on_fail: bool = False,
) -> BatchContext:
    """Lee `resource` y `operation` del item 0 y los fija para todo el batch."""

    raw_resource = resource if resource is not None else source.get("resource", 0)
    operation = source.get("operation", 0, "")
    return BatchContext(
        resource=ResourceKind.parse(raw_resource if raw_resource is not None else ""),
        operation=str(operation or ""),
        continue_on_fail=continue_on_fail,
    )


class ParameterSet:
    """Vista tipada de los parámetros de un item."""

    def __init__(self, source: ParameterSource, item_index: int) -> None:
        self._source = source
        self.item_index = item_index

    def raw(self, name: str, default: Any = None) -> Any:
        return self._source.get(name, self.item_index, default)

    def string(self, name: str, default: str = "") -> str:
        value = self.raw(name)
        if value is None:
            return default
        return value if isinstance(value, str) else str(value)

    def integer(self, name: str, default: int = 0) -> int:
        value = self.raw(name)
        if value is None or value == "":
            return default
        if isinstance(value, bool):
            raise InvalidParameterValue(name, value, "an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise InvalidParameterValue(name, value, "an integer")

    def boolean(self, name: str, default: bool = False) -> bool:
        value = self.raw(name)
        if value is None or value == "":
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "1", "yes", "on"):
                return True
            if lowered in ("false", "0", "no", "off"):
                return False
        if isinstance(value, int):
            return bool(value)
        raise InvalidParameterValue(name, value, "a boolean")

    def require_string(self, name: str) -> str:
        value = self.string(name)
        if not value.strip():
            raise MissingRequiredParameter(name)
        return value

    def require_integer(self, name: str) -> int:
        if self.raw(name) in (None, ""):
            raise MissingRequiredParameter(name)
        return self.integer(name)

    def require_raw(self, name: str) -> Any:
        value = self.raw(name)
        if value is None or value == "" or value == [] or value == {}:
            raise MissingRequiredParameter(name)
        return value
