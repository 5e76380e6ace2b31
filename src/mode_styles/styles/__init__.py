"""Theme-aware, property-level cascading style resolution."""

from .defaults import DEFAULT_STYLES, MODE_DESCRIPTIONS, defaults_for_mode
from .models import (
    LAYER_NAMES,
    MODES,
    PROPERTIES_BY_KEY,
    STYLE_PROPERTIES,
    THEME_KINDS,
    Mode,
    ModeConfig,
    MergedModeConfig,
    StyleBlock,
    StyleProperty,
    ThemeKind,
    ThemeOverride,
    block_from_values,
)
from .parsing import parse_mode_config, unknown_keys
from .resolver import (
    StyleResolver,
    merged_config,
    resolve_mode_style,
    resolve_property,
)
from .themes import HostThemeKind, classify_theme, fallback_chain, recognize_theme

__all__ = [
    "DEFAULT_STYLES",
    "MODE_DESCRIPTIONS",
    "defaults_for_mode",
    "LAYER_NAMES",
    "MODES",
    "PROPERTIES_BY_KEY",
    "STYLE_PROPERTIES",
    "THEME_KINDS",
    "Mode",
    "ModeConfig",
    "MergedModeConfig",
    "StyleBlock",
    "StyleProperty",
    "ThemeKind",
    "ThemeOverride",
    "block_from_values",
    "parse_mode_config",
    "unknown_keys",
    "StyleResolver",
    "merged_config",
    "resolve_mode_style",
    "resolve_property",
    "HostThemeKind",
    "classify_theme",
    "fallback_chain",
    "recognize_theme",
]
