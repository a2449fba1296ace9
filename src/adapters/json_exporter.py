"""Exportación JSON de los resultados de un batch.

Por qué JSON:
- Es el formato que consume el host (lista de `{json, pairedItem}`).
- Permite encadenar la salida con otras herramientas y pipelines.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from core.domain.models import ItemResult


def dump_results(results: Sequence[ItemResult]) -> str:
    payload = [result.to_wire() for result in results]
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_results_json(*, results: Sequence[ItemResult], output_path: Path) -> Path:
    """Exporta los resultados a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_results(results), encoding="utf-8")
    return output_path
