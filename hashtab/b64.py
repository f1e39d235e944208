"""Base64 encoding and a lenient decoder that also accepts the URL-safe alphabet."""

from __future__ import annotations

import base64

__all__ = ["decode", "encode"]

_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


def _build_decode_table() -> tuple[int, ...]:
    table = [0] * 256
    for value, char in enumerate(_ALPHABET):
        table[char] = value
    # URL-safe and legacy variants of the last two symbols.
    for char in b"-.":
        table[char] = 62
    for char in b",_":
        table[char] = 63
    return tuple(table)


_DECODE_TABLE = _build_decode_table()


def encode(data: bytes) -> str:
    """Encode bytes as padded standard base64."""
    return base64.b64encode(bytes(data)).decode("ascii")


def _symbol(data: bytes, index: int) -> int:
    # Reading past the end behaves like reading a terminating NUL.
    return _DECODE_TABLE[data[index]] if index < len(data) else 0


def decode(text: str | bytes) -> bytes:
    """Decode base64 text leniently.

    Accepts both the standard and URL-safe alphabets, with or without
    padding. Characters outside the alphabet decode as zero bits; this
    function never raises on malformed input.
    """
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    length = len(data)
    pad = 1 if length > 0 and (length % 4 or data[-1] == ord("=")) else 0
    full = ((length + 3) // 4 - pad) * 4
    out = bytearray()
    for i in range(0, full, 4):
        n = (
            _symbol(data, i) << 18
            | _symbol(data, i + 1) << 12
            | _symbol(data, i + 2) << 6
            | _symbol(data, i + 3)
        )
        out += bytes((n >> 16 & 0xFF, n >> 8 & 0xFF, n & 0xFF))
    if pad:
        n = _symbol(data, full) << 18 | _symbol(data, full + 1) << 12
        out.append(n >> 16 & 0xFF)
        if length > full + 2 and data[full + 2] != ord("="):
            n |= _symbol(data, full + 2) << 6
            out.append(n >> 8 & 0xFF)
    return bytes(out)