"""Configuración de logging.

Los módulos usan `logging.getLogger(__name__)`; aquí solo se decide cómo se
renderiza. Por defecto con `rich.logging.RichHandler` (misma consola que la
CLI); `plain` deja un formato de una línea apto para pipelines.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "tron-node"


def setup_logging(level: str = "WARNING", fmt: str = "rich", console: Console | None = None) -> None:
    """Configura el root logger. Idempotente: reemplaza el handler propio."""

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler: logging.Handler
    if fmt == "plain":
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)-7s] %(name)s: %(message)s", "%H:%M:%S")
        )
    else:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    handler.set_name(_HANDLER_NAME)
    root.addHandler(handler)

    # httpx loguea cada request a INFO; solo lo queremos en DEBUG.
    if root.level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
