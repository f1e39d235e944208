"""Colors used to mark hash results by their verification state."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from hashtab.settings import Settings, rgb

__all__ = [
    "CUSTOM_COLORS",
    "HASH_COLOR_SETTINGS",
    "HashColorSetting",
    "HashColorType",
    "color_setting_for",
    "colors_for",
    "format_color",
]


class HashColorType(enum.Enum):
    """The verification state a hash result is shown in."""

    ERROR = enum.auto()
    MATCH = enum.auto()
    INSECURE = enum.auto()
    MISMATCH = enum.auto()
    UNKNOWN = enum.auto()


@dataclass(frozen=True)
class HashColorSetting:
    """Names of the settings that control the colors of one state."""

    kind: HashColorType
    fg_enabled: str
    fg_color: str
    bg_enabled: str
    bg_color: str


def _entry(kind: HashColorType, prefix: str) -> HashColorSetting:
    return HashColorSetting(
        kind=kind,
        fg_enabled=f"{prefix}_fg_enabled",
        fg_color=f"{prefix}_fg_color",
        bg_enabled=f"{prefix}_bg_enabled",
        bg_color=f"{prefix}_bg_color",
    )


HASH_COLOR_SETTINGS: tuple[HashColorSetting, ...] = (
    _entry(HashColorType.ERROR, "error"),
    _entry(HashColorType.MATCH, "match"),
    _entry(HashColorType.INSECURE, "insecure"),
    _entry(HashColorType.MISMATCH, "mismatch"),
    _entry(HashColorType.UNKNOWN, "unknown"),
)

_BY_KIND = {entry.kind: entry for entry in HASH_COLOR_SETTINGS}

# Palette offered as custom colors when picking a color.
CUSTOM_COLORS: tuple[int, ...] = (
    rgb(45, 170, 23),
    rgb(170, 82, 23),
    rgb(230, 55, 23),
    rgb(255, 55, 23),
) + (rgb(255, 255, 255),) * 12


def color_setting_for(kind: HashColorType) -> HashColorSetting:
    """Return the setting names that control the colors of ``kind``."""
    try:
        return _BY_KIND[HashColorType(kind)]
    except (KeyError, ValueError):
        raise ValueError(f"unknown hash color type: {kind!r}") from None


def colors_for(settings: Settings, kind: HashColorType) -> tuple[int | None, int | None]:
    """Return the (foreground, background) colors for ``kind``.

    A color is None where it is disabled and the system default applies.
    """
    entry = color_setting_for(kind)
    fg = getattr(settings, entry.fg_color) if getattr(settings, entry.fg_enabled) else None
    bg = getattr(settings, entry.bg_color) if getattr(settings, entry.bg_enabled) else None
    return fg, bg


def format_color(color: int) -> str:
    """Render a 0x00BBGGRR color value as ``#RRGGBB``."""
    red = color & 0xFF
    green = (color >> 8) & 0xFF
    blue = (color >> 16) & 0xFF
    return f"#{red:02X}{green:02X}{blue:02X}"