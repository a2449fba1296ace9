"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ItemResult
from core.services.operations import OperationEntry

NOTICE = (
    "This node is licensed under the Business Source License 1.1 (BSL 1.1).\n"
    "Production use by for-profit organizations requires a commercial license."
)

# Estado de proceso: se activa en el primer uso y no se resetea nunca.
_notice_shown = False


def print_notice_once(console: Console) -> bool:
    """Imprime el aviso de licencia como mucho una vez por proceso.

    Devuelve True si se imprimió en esta llamada.
    """

    global _notice_shown
    if _notice_shown:
        return False
    _notice_shown = True
    title = Text("tron-node", style="bold red")
    console.print(Panel(Text(NOTICE, style="dim"), title=title, border_style="red", padding=(0, 2)))
    return True


def _preview(data: dict, limit: int = 80) -> str:
    text = json.dumps(data, ensure_ascii=False, sort_keys=True)
    return text if len(text) <= limit else text[: limit - 1] + "…"


def build_results_table(results: Sequence[ItemResult]) -> Table:
    table = Table(title="Results")
    table.add_column("Item", style="cyan", no_wrap=True, justify="right")
    table.add_column("Status", no_wrap=True)
    table.add_column("Data", style="white")
    for result in results:
        if result.is_error:
            table.add_row(
                str(result.paired_item.item),
                Text("error", style="red"),
                Text(str(result.data["error"]), style="red"),
            )
        else:
            table.add_row(str(result.paired_item.item), Text("ok", style="green"), _preview(result.data))
    return table


def build_operations_table(entries: Iterable[OperationEntry]) -> Table:
    table = Table(title="Operations")
    table.add_column("Resource", style="cyan", no_wrap=True)
    table.add_column("Operation", style="bright_green", no_wrap=True)
    table.add_column("Body", style="magenta", no_wrap=True)
    table.add_column("Description", style="dim")
    for entry in entries:
        table.add_row(entry.resource.value, entry.name, entry.encoding.value, entry.description)
    return table
