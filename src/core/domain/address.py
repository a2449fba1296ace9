"""Validación de direcciones TRON.

Formatos aceptados:
- base58check (empieza por `T`): 21 bytes (prefijo 0x41 + 20) + checksum de
  4 bytes (doble SHA-256).
- hex: 42 caracteres empezando por `41`.

Solo valida forma; no deriva claves ni consulta la red.
"""

from __future__ import annotations

import hashlib

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {ch: i for i, ch in enumerate(_ALPHABET)}
_PREFIX = 0x41
_PAYLOAD_LEN = 21


def _b58decode(value: str) -> bytes | None:
    num = 0
    for ch in value:
        digit = _INDEX.get(ch)
        if digit is None:
            return None
        num = num * 58 + digit
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    leading = len(value) - len(value.lstrip("1"))
    return b"\x00" * leading + body


def _is_base58(address: str) -> bool:
    raw = _b58decode(address)
    if raw is None or len(raw) != _PAYLOAD_LEN + 4:
        return False
    payload, checksum = raw[:_PAYLOAD_LEN], raw[_PAYLOAD_LEN:]
    if payload[0] != _PREFIX:
        return False
    digest = hashlib.sha256(hashlib.sha256(payload).digest()).digest()
    return digest[:4] == checksum


def _is_hex(address: str) -> bool:
    value = address[2:] if address.lower().startswith("0x") else address
    if len(value) != _PAYLOAD_LEN * 2:
        return False
    try:
        raw = bytes.fromhex(value)
    except ValueError:
        return False
    return raw[0] == _PREFIX


def address_format(address: str) -> str:
    """Devuelve `base58`, `hex` o `invalid`."""

    address = (address or "").strip()
    if address.startswith("T") and _is_base58(address):
        return "base58"
    if _is_hex(address):
        return "hex"
    return "invalid"


def is_valid_address(address: str) -> bool:
    return address_format(address) != "invalid"
