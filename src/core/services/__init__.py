"""Servicios del Core: builder, dispatcher, procesado de items y router."""

from core.services.dispatcher import dispatch, supported_operations
from core.services.item_processor import process_batch
from core.services.request_builder import build
from core.services.router import execute

__all__ = [
    "build",
    "dispatch",
    "execute",
    "process_batch",
    "supported_operations",
]
