"""Theme classification and per-kind fallback chains."""

from __future__ import annotations

from enum import IntEnum
from typing import Mapping, Optional

from .models import ThemeKind


class HostThemeKind(IntEnum):
    """Color theme kinds as numbered by the host editor."""

    LIGHT = 1
    DARK = 2
    HIGH_CONTRAST = 3
    HIGH_CONTRAST_LIGHT = 4


_BY_HOST_VALUE: Mapping[int, ThemeKind] = {
    HostThemeKind.LIGHT: "light",
    HostThemeKind.DARK: "dark",
    # The plain high-contrast kind is the dark variant.
    HostThemeKind.HIGH_CONTRAST: "highContrastDark",
    HostThemeKind.HIGH_CONTRAST_LIGHT: "highContrastLight",
}

_BY_NAME: Mapping[str, ThemeKind] = {
    "dark": "dark",
    "light": "light",
    "highcontrastdark": "highContrastDark",
    "highcontrastlight": "highContrastLight",
    "highcontrast": "highContrastDark",
    "high_contrast": "highContrastDark",
    "high_contrast_dark": "highContrastDark",
    "high_contrast_light": "highContrastLight",
    "vs": "light",
    "vs-dark": "dark",
    "hc-black": "highContrastDark",
    "hc-light": "highContrastLight",
}

_CHAINS: Mapping[ThemeKind, tuple[str, ...]] = {
    "highContrastDark": ("highContrastDark", "dark"),
    "highContrastLight": ("highContrastLight", "light"),
    "dark": ("dark",),
    "light": ("light",),
}

DEFAULT_THEME_KIND: ThemeKind = "dark"


def _recognize_value(value: object) -> Optional[ThemeKind]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return _BY_HOST_VALUE.get(value)
    if isinstance(value, str):
        return _BY_NAME.get(value.strip().lower())
    return None


def recognize_theme(signal: object) -> Optional[ThemeKind]:
    """Return the theme kind for ``signal`` or ``None`` when unrecognized.

    Besides raw values, objects exposing a ``kind`` attribute (the host's
    active theme object) are unwrapped one level.
    """

    if isinstance(signal, (bool, int, str)):
        return _recognize_value(signal)
    return _recognize_value(getattr(signal, "kind", None))


def classify_theme(signal: object) -> ThemeKind:
    """Map a host theme signal onto one of the four theme kinds.

    Unrecognized signals fall back to ``"dark"``; this never raises.
    """

    return recognize_theme(signal) or DEFAULT_THEME_KIND


def fallback_chain(kind: ThemeKind) -> tuple[str, ...]:
    """Layers consulted for ``kind``, most specific first."""

    return _CHAINS.get(kind, _CHAINS[DEFAULT_THEME_KIND])


__all__ = [
    "DEFAULT_THEME_KIND",
    "HostThemeKind",
    "classify_theme",
    "fallback_chain",
    "recognize_theme",
]
