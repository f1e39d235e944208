"""Parsing of checksum files: hex (md5sum style), base64 and SFV formats."""

from __future__ import annotations

import enum
import os
import re
from typing import NamedTuple

from hashtab import b64
from hashtab.utl import hash_string_to_bytes

__all__ = [
    "DEFAULT_MAX_HASH_SIZE",
    "FileSum",
    "SumFileParser",
    "parse_sum_file",
    "try_parse_sum_file",
]

# Size in bytes of the longest supported digest (SHA-512).
DEFAULT_MAX_HASH_SIZE = 64

# Six bytes is the length of a base64 encoded CRC.
_MIN_SUMFILE_SIZE = 6

_MAX_FILE_SIZE = 0xFFFFFFFF

_WHITESPACE = b"\r\n\t\f\v "
_UTF8_BOM = b"\xef\xbb\xbf"
_LINE_BREAK = re.compile(rb"[\r\n]")

_HEX_LINE = re.compile(rb"([0-9a-fA-F]{8,512}) [ *](.++)")
_B64_LINE = re.compile(rb"([0-9a-zA-Z=+/,\-_]{6,512}) [ *](.++)")
_SFV_LINE = re.compile(rb"([^ ]++)\s++([0-9a-fA-F]{8})")


class FileSum(NamedTuple):
    """A file name (empty if the file holds a bare hash) and its expected hash."""

    name: str
    hash: bytes


class _CommentStyle(enum.Enum):
    UNKNOWN = enum.auto()
    SEMICOLON = enum.auto()
    HASH = enum.auto()


class _HashStyle(enum.Enum):
    UNKNOWN = enum.auto()
    HEX = enum.auto()
    SFV = enum.auto()
    BASE64 = enum.auto()


class SumFileParser:
    """Line-by-line sumfile parser that locks onto the first style it sees."""

    def __init__(self) -> None:
        self._comment = _CommentStyle.UNKNOWN
        self._hash = _HashStyle.UNKNOWN
        self.files: list[FileSum] = []

    def _add(self, name: bytes, digest: bytes) -> None:
        self.files.append(FileSum(name.decode("utf-8"), digest))

    def process_line(self, line: bytes | str) -> bool:
        """Consume one line; return False if it fits none of the allowed formats.

        Raises UnicodeDecodeError if a file name is not valid UTF-8.
        """
        if isinstance(line, str):
            line = line.encode("utf-8")

        if not line.strip(_WHITESPACE):
            return True

        first = line[:1]
        if self._comment in (_CommentStyle.UNKNOWN, _CommentStyle.HASH) and first == b"#":
            self._comment = _CommentStyle.HASH
            return True
        if self._comment in (_CommentStyle.UNKNOWN, _CommentStyle.SEMICOLON) and first == b";":
            self._comment = _CommentStyle.SEMICOLON
            return True

        if self._hash in (_HashStyle.UNKNOWN, _HashStyle.SFV):
            match = _SFV_LINE.fullmatch(line)
            if match:
                self._hash = _HashStyle.SFV
                name = match.group(1).rstrip(b" ")
                digest = hash_string_to_bytes(match.group(2).decode("ascii"))
                if digest:
                    self._add(name, digest)
                    return True

        if self._hash in (_HashStyle.UNKNOWN, _HashStyle.HEX):
            match = _HEX_LINE.fullmatch(line)
            if match:
                self._hash = _HashStyle.HEX
                digest = hash_string_to_bytes(match.group(1).decode("ascii"))
                if digest:
                    self._add(match.group(2), digest)
                    return True

        if self._hash in (_HashStyle.UNKNOWN, _HashStyle.BASE64):
            match = _B64_LINE.fullmatch(line)
            if match:
                self._hash = _HashStyle.BASE64
                digest = b64.decode(match.group(1))
                if digest:
                    self._add(match.group(2), digest)
                    return True

        return False


def parse_sum_file(
    data: bytes, max_hash_size: int = DEFAULT_MAX_HASH_SIZE
) -> list[FileSum]:
    """Parse the contents of a sumfile.

    Returns an empty list if the data is not a sumfile. A small file
    holding nothing but one hex hash yields a single entry with an
    empty name.
    """
    data = bytes(data)
    size = len(data)
    if size < _MIN_SUMFILE_SIZE:
        return []

    body = data[len(_UTF8_BOM):] if data.startswith(_UTF8_BOM) else data

    # Longest hash, hexed, with room for whitespace around it.
    if size <= max_hash_size * 2 * 2:
        stripped = body.strip(_WHITESPACE)
        if stripped:
            digest = hash_string_to_bytes(stripped.decode("latin-1"))
            if digest:
                return [FileSum("", digest)]

    parser = SumFileParser()
    try:
        for line in _LINE_BREAK.split(body):
            if line and not parser.process_line(line):
                return []
    except UnicodeDecodeError:
        return []
    return list(parser.files)


def try_parse_sum_file(
    path: str | os.PathLike[str], max_hash_size: int = DEFAULT_MAX_HASH_SIZE
) -> list[FileSum]:
    """Read and parse a sumfile from disk.

    Raises OSError if the file cannot be read. Files that are too small
    or too large to be a sumfile give an empty list.
    """
    with open(path, "rb") as handle:
        size = os.fstat(handle.fileno()).st_size
        if size > _MAX_FILE_SIZE or size < _MIN_SUMFILE_SIZE:
            return []
        return parse_sum_file(handle.read(), max_hash_size)