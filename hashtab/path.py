"""Turning a selection of paths into the list of files to hash.

This covers sumfile detection, directory expansion and computing the
paths shown relative to a common base directory.
"""

from __future__ import annotations

import os
from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from hashtab.settings import Settings
from hashtab.sumfile import DEFAULT_MAX_HASH_SIZE, FileSum, try_parse_sum_file
from hashtab.utl import make_path_long_compatible

__all__ = [
    "NOT_SUMFILE",
    "UNKNOWN_SUMFILE",
    "FileInfo",
    "ProcessedFileList",
    "normalize_path",
    "process_everything",
]

# The main file is not a sumfile.
NOT_SUMFILE = -2
# The main file is a sumfile of an algorithm not recognised by its extension.
UNKNOWN_SUMFILE = -1

_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


@dataclass
class FileInfo:
    """A file to hash and the hashes it is expected to have."""

    # Relative to the base path, or absolute if the file is outside it.
    relative_path: str = ""
    # Expected hashes; which algorithm each belongs to is worked out later.
    expected_hashes: list[bytes] = field(default_factory=list)


@dataclass
class ProcessedFileList:
    """The outcome of :func:`process_everything`.

    ``sumfile_type`` is :data:`NOT_SUMFILE`, :data:`UNKNOWN_SUMFILE`, or the
    index of the algorithm whose sumfile extension the main file carries.
    ``base_path`` ends with a separator unless it is empty. ``files`` is
    keyed by normalized path, in discovery order.
    """

    sumfile_type: int = NOT_SUMFILE
    base_path: str = ""
    files: dict[str, FileInfo] = field(default_factory=dict)


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Make a path absolute and normal, keeping a trailing separator.

    On Windows the result carries the long-path prefix.
    """
    text = os.fspath(path)
    trailing = text.endswith(_SEPARATORS)
    full = os.path.abspath(text)
    if trailing and not full.endswith(_SEPARATORS):
        full += os.sep
    if os.name == "nt":
        full = make_path_long_compatible(full)
    return full


def _last_separator(text: str) -> int:
    return max(text.rfind(sep) for sep in _SEPARATORS)


def _file_name(path: str) -> str:
    return path[_last_separator(path) + 1 :]


def _extension(name: str) -> str | None:
    dot = name.rfind(".")
    return name[dot + 1 :] if dot >= 0 else None


def _relative(normalized: str, base_path: str) -> str:
    if normalized.startswith(base_path):
        return normalized[len(base_path) :]
    return normalized


def _read_sums(path: str) -> list[FileSum]:
    # Unreadable files simply give no sums.
    try:
        return try_parse_sum_file(path, DEFAULT_MAX_HASH_SIZE)
    except OSError:
        return []


def _list_directory(path: str) -> list[str] | None:
    """Return the children of a directory, or None if it cannot be listed."""
    try:
        with os.scandir(path) as entries:
            names = sorted(entry.name for entry in entries if not entry.is_symlink())
    except OSError:
        return None
    return [os.path.join(path, name) for name in names]


def process_everything(
    paths: Iterable[str | os.PathLike[str]],
    settings: Settings,
    algorithms: Mapping[str, Sequence[str]],
) -> ProcessedFileList:
    """Work out which files to hash and what hashes to expect for them.

    ``algorithms`` maps each algorithm name to its sumfile extensions, in
    algorithm index order. A single path that turns out to be a sumfile is
    expanded into the files it lists. Directories are expanded recursively,
    skipping symbolic links; a directory that cannot be listed is kept as a
    file so that its error shows up when it is hashed.
    """
    pending = [os.fspath(p) for p in paths]
    result = ProcessedFileList()
    sums_absolute: list[tuple[str, bytes]] = []

    if len(pending) == 1:
        sumfile = pending[0]
        name = _file_name(sumfile)
        sumfile_base = sumfile[: len(sumfile) - len(name)]
        # With a single file, the base is surely its containing directory.
        result.base_path = sumfile_base

        sums = _read_sums(sumfile)
        if any(entry.name for entry in sums):
            result.sumfile_type = UNKNOWN_SUMFILE
            extension = _extension(name)
            if extension is not None:
                for index, extensions in enumerate(algorithms.values()):
                    if extension in extensions:
                        result.sumfile_type = index
            # A bare hash without a file name is meaningless here.
            sums_absolute.extend(
                (sumfile_base + entry.name, entry.hash) for entry in sums if entry.name
            )
            if not settings.hash_sumfile_too:
                pending.pop(0)
    elif pending:
        pending.sort()
        common = os.path.commonprefix([pending[0], pending[-1]])
        cut = _last_separator(common)
        result.base_path = common[:cut] if cut >= 0 else common

    if result.base_path:
        if not result.base_path.endswith(_SEPARATORS):
            result.base_path += os.sep
        result.base_path = normalize_path(result.base_path)

    for path, digest in sums_absolute:
        normalized = normalize_path(path)
        existing = result.files.get(normalized)
        if existing is not None:
            existing.expected_hashes.append(digest)
        else:
            result.files[normalized] = FileInfo(
                _relative(normalized, result.base_path), [digest]
            )

    queue = deque(pending)
    while queue:
        normalized = normalize_path(queue.popleft())

        if os.path.isdir(normalized):
            children = _list_directory(normalized)
            if children is not None:
                queue.extend(children)
                continue

        info = FileInfo(_relative(normalized, result.base_path))
        # Never look for companion sumfiles while processing one.
        if result.sumfile_type == NOT_SUMFILE and settings.look_for_sumfiles:
            for algorithm, extensions in algorithms.items():
                if not settings.is_algorithm_enabled(algorithm):
                    continue
                for extension in extensions:
                    sums = _read_sums(f"{normalized}.{extension}")
                    info.expected_hashes.extend(entry.hash for entry in sums)

        result.files.setdefault(normalized, info)

    return result