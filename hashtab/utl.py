"""Hex/hash string helpers, path helpers and version numbers."""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

__all__ = [
    "Version",
    "find_hash_in_string",
    "floor_icon_size",
    "hash_bytes_to_string",
    "hash_string_to_bytes",
    "hex_digit",
    "make_path_long_compatible",
    "unhex",
]

_ICON_SIZES = (256, 192, 128, 96, 64, 48, 40, 32, 24, 16)

_LONG_PATH_PREFIX = "\\\\?\\"

_HASH_IN_TEXT = re.compile(
    r"\b(?:[0-9a-f]{2})(?: ?+[0-9a-f]{2}){3,}+\b"
    r"|\b(?:[0-9A-F]{2})(?: ?+[0-9A-F]{2}){3,}+\b",
    re.ASCII,
)


def hex_digit(n: int, upper: bool = True) -> str:
    """Return the hexadecimal digit for a nibble value 0..15."""
    if not 0 <= n <= 0xF:
        raise ValueError(f"nibble out of range: {n}")
    if n < 0xA:
        return chr(ord("0") + n)
    return chr(ord("A" if upper else "a") + n - 0xA)


def unhex(ch: str) -> int:
    """Return the value of a single hexadecimal digit.

    Raises ValueError if ``ch`` is not an ASCII hex digit.
    """
    if len(ch) != 1 or ord(ch) >= 0x80:
        raise ValueError(f"not a hex digit: {ch!r}")
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "a" <= ch <= "f":
        return ord(ch) - ord("a") + 0xA
    if "A" <= ch <= "F":
        return ord(ch) - ord("A") + 0xA
    raise ValueError(f"not a hex digit: {ch!r}")


def hash_bytes_to_string(data: bytes, upper: bool = True) -> str:
    """Render hash bytes as a hexadecimal string."""
    return "".join(
        hex_digit(b >> 4, upper) + hex_digit(b & 0xF, upper) for b in data
    )


def hash_string_to_bytes(text: str) -> bytes:
    """Parse a hexadecimal hash string, allowing spaces between byte pairs.

    Returns empty bytes if the string is not a valid hash. A single
    trailing character that does not form a full pair is ignored.
    """
    size = len(text)
    result = bytearray()
    i = 0
    while i < size - 1:
        while text[i] == " ":
            i += 1
            if i >= size - 1:
                break
        pair = text[i : i + 2]
        if len(pair) != 2:
            return b""
        try:
            high, low = unhex(pair[0]), unhex(pair[1])
        except ValueError:
            return b""
        result.append(high << 4 | low)
        i += 2
    return bytes(result)


def find_hash_in_string(text: str) -> bytes:
    """Find the first hash-looking run of hex byte pairs in free text.

    Returns empty bytes if nothing that looks like a hash is present.
    """
    match = _HASH_IN_TEXT.search(text)
    if match is None:
        return b""
    return hash_string_to_bytes(match.group(0))


def floor_icon_size(size: int) -> int:
    """Round a pixel size down to the nearest standard icon size."""
    return next((v for v in _ICON_SIZES if size >= v), size)


def make_path_long_compatible(path: str) -> str:
    """Prefix a path for long-path access unless it already starts with two backslashes."""
    if path.startswith("\\\\"):
        return path
    return _LONG_PATH_PREFIX + path


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A major.minor.patch version with 16-bit components."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f"{name} out of range: {value}")

    def as_number(self) -> int:
        """Pack the version into a single comparable integer."""
        return (self.major << 32) | (self.minor << 16) | self.patch

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_number() == other.as_number()

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_number() < other.as_number()

    def __hash__(self) -> int:
        return hash(self.as_number())

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"