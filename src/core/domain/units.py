"""Conversión TRX <-> Sun.

1 TRX = 1_000_000 Sun. Se usa `Decimal` para no arrastrar errores de coma
flotante en importes monetarios.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, InvalidOperation

SUN_PER_TRX = 1_000_000


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    try:
        # float -> str evita la representación binaria exacta (0.1 -> 0.1000000000000000055...)
        amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def to_sun(trx: Decimal | int | float | str) -> int:
    """Convierte TRX a Sun truncando fracciones de Sun."""

    amount = _to_decimal(trx) * SUN_PER_TRX
    return int(amount.to_integral_value(rounding=ROUND_FLOOR))


def from_sun(sun: Decimal | int | str) -> Decimal:
    """Convierte Sun a TRX (exacto)."""

    amount = _to_decimal(sun)
    if amount != amount.to_integral_value():
        raise ValueError(f"Sun amounts must be integers: {sun!r}")
    return amount / SUN_PER_TRX
