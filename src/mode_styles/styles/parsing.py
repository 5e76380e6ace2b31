"""Defensive parse boundary between raw settings and ``ModeConfig``."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .models import LAYER_NAMES, PROPERTIES_BY_KEY, ModeConfig, StyleBlock

# Accepted spellings per layer, in precedence order.
LAYER_ALIASES: Mapping[str, tuple[str, ...]] = {
    "dark": ("dark", "[dark]"),
    "light": ("light", "[light]"),
    "highContrastDark": ("highContrastDark", "[highContrastDark]", "darkHC"),
    "highContrastLight": ("highContrastLight", "[highContrastLight]", "lightHC"),
}

LEGACY_KEYS: Mapping[str, str] = {"background": "backgroundColor"}

_LAYER_KEYS = frozenset(alias for aliases in LAYER_ALIASES.values() for alias in aliases)


def _parse_block(raw: Mapping[object, object]) -> StyleBlock:
    values: Dict[str, str] = {}
    for key, prop in PROPERTIES_BY_KEY.items():
        value = raw.get(key)
        if isinstance(value, str):
            values[prop.attr] = value
    for legacy, current in LEGACY_KEYS.items():
        attr = PROPERTIES_BY_KEY[current].attr
        value = raw.get(legacy)
        if attr not in values and isinstance(value, str):
            values[attr] = value
    return StyleBlock(**values)


def _find_layer(raw: Mapping[object, object], name: str) -> Optional[StyleBlock]:
    for alias in LAYER_ALIASES[name]:
        value = raw.get(alias)
        if isinstance(value, Mapping):
            return _parse_block(value)
    return None


def parse_mode_config(raw: object) -> ModeConfig:
    """Coerce a raw settings value into a ``ModeConfig``.

    Anything malformed is treated as absent: a non-mapping ``raw`` yields an
    empty config, non-string property values are dropped and layers that
    are not mappings are skipped.
    """

    if not isinstance(raw, Mapping):
        return ModeConfig()
    layers: Dict[str, StyleBlock] = {}
    for name in LAYER_NAMES:
        block = _find_layer(raw, name)
        if block is not None:
            layers[name] = block
    return ModeConfig(common=_parse_block(raw), layers=layers)


def unknown_keys(raw: object) -> tuple[str, ...]:
    """Dotted paths of keys the parser ignores, for user-facing warnings."""

    if not isinstance(raw, Mapping):
        return ()
    result: list[str] = []
    for key, value in raw.items():
        if key in _LAYER_KEYS and isinstance(value, Mapping):
            result.extend(f"{key}.{inner}" for inner in _ignored_in_block(value))
        elif key not in _LAYER_KEYS and _is_property_value(key, value):
            continue
        else:
            result.append(str(key))
    return tuple(result)


def _is_property_value(key: object, value: object) -> bool:
    known = key in PROPERTIES_BY_KEY or key in LEGACY_KEYS
    return known and isinstance(value, str)


def _ignored_in_block(block: Mapping[object, object]) -> list[str]:
    return [
        str(key) for key, value in block.items() if not _is_property_value(key, value)
    ]


__all__ = ["LAYER_ALIASES", "LEGACY_KEYS", "parse_mode_config", "unknown_keys"]
