"""Persistent user settings stored as 32-bit values."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

__all__ = ["Settings", "SettingsStore", "rgb"]

_DWORD_MAX = 0xFFFFFFFF

_DEFAULT_ALGORITHMS = frozenset({"MD5", "SHA-1", "SHA-256", "SHA-512"})


def rgb(r: int, g: int, b: int) -> int:
    """Pack red, green and blue components into a 0x00BBGGRR color value."""
    for component in (r, g, b):
        if not 0 <= component <= 0xFF:
            raise ValueError(f"color component out of range: {component}")
    return r | (g << 8) | (b << 16)


class SettingsStore:
    """Named 32-bit unsigned values, optionally persisted to a JSON file."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._values: dict[str, object] = self._load()

    def _load(self) -> dict[str, object]:
        if self._path is None:
            return {}
        try:
            with self._path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump(self._values, handle, indent=2, sort_keys=True)

    def get(self, name: str, default: int) -> int:
        """Return the stored value, or ``default`` if absent or not a 32-bit value."""
        value = self._values.get(name)
        if isinstance(value, bool) or not isinstance(value, int):
            return default
        if not 0 <= value <= _DWORD_MAX:
            return default
        return value

    def set(self, name: str, value: int) -> None:
        """Store a 32-bit unsigned value and persist it."""
        value = int(value)
        if not 0 <= value <= _DWORD_MAX:
            raise ValueError(f"value out of range for {name!r}: {value}")
        self._values[name] = value
        self._save()


@dataclass(frozen=True)
class _Spec:
    key: str
    default: bool | int
    is_color: bool = False


def _flag(key: str, default: bool) -> _Spec:
    return _Spec(key, default)


def _color(key: str, default: int) -> _Spec:
    return _Spec(key, default, is_color=True)


_SPECS: dict[str, _Spec] = {
    "display_uppercase": _flag("DisplayUppercase", True),
    "display_monospace": _flag("DisplayMonospace", True),
    "look_for_sumfiles": _flag("LookForSumfiles", False),
    "sumfile_uppercase": _flag("SumfileUppercase", True),
    "sumfile_unix_endings": _flag("SumfileLF", True),
    "sumfile_use_double_space": _flag("SumfileDoubleSpace", False),
    "sumfile_forward_slashes": _flag("SumfileForwardSlash", True),
    "sumfile_dot_hash_compatible": _flag("SumfileDotHashCompat", True),
    "sumfile_banner": _flag("SumfileBanner", True),
    "sumfile_banner_date": _flag("SumfileBannerDate", False),
    "virustotal_tos": _flag("VTToS", False),
    "clipboard_autoenable": _flag("ClipboardAutoenable", True),
    "clipboard_autoenable_if_none": _flag("ClipboardAutoenableIfNone", True),
    "clipboard_autoenable_exclusive": _flag("ClipboardAutoenableExclusive", False),
    "checkagainst_autoformat": _flag("CheckAgainstAutoformat", False),
    "checkagainst_strict": _flag("CheckAgainstStruct", False),
    "hash_sumfile_too": _flag("HashSumfileToo", False),
    "sumfile_algorithm_only": _flag("SumfileAlgorithmOnly", True),
    # No hash to compare to: system colors.
    "unknown_fg_enabled": _flag("UnknownFgEnabled", False),
    "unknown_fg_color": _color("UnknownFgColor", rgb(0, 0, 0)),
    "unknown_bg_enabled": _flag("UnknownBgEnabled", False),
    "unknown_bg_color": _color("UnknownBgColor", rgb(255, 255, 255)),
    # Secure hash matches: green background, white text.
    "match_fg_enabled": _flag("MatchFgEnabled", True),
    "match_fg_color": _color("MatchFgColor", rgb(255, 255, 255)),
    "match_bg_enabled": _flag("MatchBgEnabled", True),
    "match_bg_color": _color("MatchBgColor", rgb(45, 170, 23)),
    # Hash mismatch: red background, white text.
    "mismatch_fg_enabled": _flag("MismatchFgEnabled", True),
    "mismatch_fg_color": _color("MismatchFgColor", rgb(255, 255, 255)),
    "mismatch_bg_enabled": _flag("MismatchBgEnabled", True),
    "mismatch_bg_color": _color("MismatchBgColor", rgb(230, 55, 23)),
    # Insecure hash matches: orange background, white text.
    "insecure_fg_enabled": _flag("InsecureFgEnabled", True),
    "insecure_fg_color": _color("InsecureFgColor", rgb(255, 255, 255)),
    "insecure_bg_enabled": _flag("InsecureBgEnabled", True),
    "insecure_bg_color": _color("InsecureBgColor", rgb(170, 82, 23)),
    # Error processing file: system background, red text.
    "error_fg_enabled": _flag("ErrorFgEnabled", True),
    "error_fg_color": _color("ErrorFgColor", rgb(255, 55, 23)),
    "error_bg_enabled": _flag("ErrorBgEnabled", False),
    "error_bg_color": _color("ErrorBgColor", rgb(255, 255, 255)),
}


def _decode(spec: _Spec, raw: int) -> bool | int:
    if spec.is_color:
        return raw & _DWORD_MAX
    return bool(raw & 0xFF)


class Settings:
    """User preferences loaded from a store.

    Each preference is an attribute. Assigning the attribute changes it for
    this session only; :meth:`set` also saves it to the store.
    """

    def __init__(self, store: SettingsStore | None = None) -> None:
        self.store = store if store is not None else SettingsStore()
        self._algorithms: dict[str, bool] = {}
        for attr, spec in _SPECS.items():
            raw = self.store.get(spec.key, int(spec.default))
            setattr(self, attr, _decode(spec, raw))

    def set(self, name: str, value: bool | int) -> None:
        """Change a setting by attribute name and persist it."""
        try:
            spec = _SPECS[name]
        except KeyError:
            raise KeyError(f"unknown setting: {name!r}") from None
        decoded = _decode(spec, int(value))
        self.store.set(spec.key, int(decoded))
        setattr(self, name, decoded)

    def is_algorithm_enabled(self, name: str) -> bool:
        """Whether the named hash algorithm is enabled."""
        if name not in self._algorithms:
            default = int(name in _DEFAULT_ALGORITHMS)
            self._algorithms[name] = bool(self.store.get(name, default) & 0xFF)
        return self._algorithms[name]

    def set_algorithm(self, name: str, enabled: bool) -> None:
        """Enable or disable the named hash algorithm and persist it."""
        enabled = bool(enabled)
        self.store.set(name, int(enabled))
        self._algorithms[name] = enabled