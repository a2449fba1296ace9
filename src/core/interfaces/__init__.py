"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.parameters import ParameterSource
from core.interfaces.transport import HttpTransport

__all__ = ["HttpTransport", "ParameterSource"]
