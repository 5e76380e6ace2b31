"""Dataclasses describing style blocks, mode configs, and the property set."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from operator import attrgetter
from types import MappingProxyType
from typing import Callable, Dict, Literal, Mapping, Optional

ThemeKind = Literal["dark", "light", "highContrastDark", "highContrastLight"]
Mode = Literal["normal", "insert", "visual", "search"]

THEME_KINDS: tuple[ThemeKind, ...] = (
    "dark",
    "light",
    "highContrastDark",
    "highContrastLight",
)
MODES: tuple[Mode, ...] = ("normal", "insert", "visual", "search")

# Theme layers share their names with the theme kinds they target.
LAYER_NAMES: tuple[str, ...] = THEME_KINDS


@dataclass(frozen=True, slots=True)
class StyleBlock:
    """Partial bag of style properties (a common block or a theme layer)."""

    background_color: Optional[str] = None
    color: Optional[str] = None
    opacity: Optional[str] = None
    outline: Optional[str] = None
    outline_color: Optional[str] = None
    outline_style: Optional[str] = None
    outline_width: Optional[str] = None
    border: Optional[str] = None
    border_color: Optional[str] = None
    border_radius: Optional[str] = None
    border_spacing: Optional[str] = None
    border_style: Optional[str] = None
    border_width: Optional[str] = None
    font_style: Optional[str] = None
    font_weight: Optional[str] = None
    text_decoration: Optional[str] = None
    cursor: Optional[str] = None
    letter_spacing: Optional[str] = None
    gutter_icon_path: Optional[str] = None
    gutter_icon_size: Optional[str] = None
    overview_ruler_color: Optional[str] = None
    overview_ruler_lane: Optional[str] = None
    range_behavior: Optional[str] = None

    def as_dict(self) -> Dict[str, str]:
        """Flat wire-key mapping; absent properties are omitted."""

        result: Dict[str, str] = {}
        for prop in STYLE_PROPERTIES:
            value = prop.read(self)
            if value is not None:
                result[prop.key] = value
        return result


@dataclass(frozen=True, slots=True)
class MergedModeConfig(StyleBlock):
    """Fully resolved style handed to renderers."""


ThemeOverride = StyleBlock


@dataclass(frozen=True, slots=True)
class StyleProperty:
    """One entry of the closed property set: wire key plus field accessor."""

    key: str
    attr: str
    getter: Callable[[StyleBlock], Optional[str]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.key or not self.attr:
            raise ValueError("StyleProperty requires both key and attr")
        object.__setattr__(self, "getter", attrgetter(self.attr))

    def read(self, block: StyleBlock) -> Optional[str]:
        return self.getter(block)


STYLE_PROPERTIES: tuple[StyleProperty, ...] = (
    StyleProperty("backgroundColor", "background_color"),
    StyleProperty("color", "color"),
    StyleProperty("opacity", "opacity"),
    StyleProperty("outline", "outline"),
    StyleProperty("outlineColor", "outline_color"),
    StyleProperty("outlineStyle", "outline_style"),
    StyleProperty("outlineWidth", "outline_width"),
    StyleProperty("border", "border"),
    StyleProperty("borderColor", "border_color"),
    StyleProperty("borderRadius", "border_radius"),
    StyleProperty("borderSpacing", "border_spacing"),
    StyleProperty("borderStyle", "border_style"),
    StyleProperty("borderWidth", "border_width"),
    StyleProperty("fontStyle", "font_style"),
    StyleProperty("fontWeight", "font_weight"),
    StyleProperty("textDecoration", "text_decoration"),
    StyleProperty("cursor", "cursor"),
    StyleProperty("letterSpacing", "letter_spacing"),
    StyleProperty("gutterIconPath", "gutter_icon_path"),
    StyleProperty("gutterIconSize", "gutter_icon_size"),
    StyleProperty("overviewRulerColor", "overview_ruler_color"),
    StyleProperty("overviewRulerLane", "overview_ruler_lane"),
    StyleProperty("rangeBehavior", "range_behavior"),
)

PROPERTIES_BY_KEY: Mapping[str, StyleProperty] = MappingProxyType(
    {prop.key: prop for prop in STYLE_PROPERTIES}
)


def _check_property_table() -> None:
    declared = {f.name for f in fields(StyleBlock)}
    listed = {prop.attr for prop in STYLE_PROPERTIES}
    if declared != listed:
        missing = sorted(declared ^ listed)
        raise RuntimeError(f"STYLE_PROPERTIES out of sync with StyleBlock: {missing}")


_check_property_table()


def block_from_values(values: Mapping[str, str]) -> StyleBlock:
    """Build a ``StyleBlock`` from wire keys; unknown keys raise ``KeyError``."""

    return StyleBlock(
        **{PROPERTIES_BY_KEY[key].attr: value for key, value in values.items()}
    )


@dataclass(frozen=True, slots=True)
class ModeConfig:
    """Parsed raw configuration for one mode."""

    common: StyleBlock = field(default_factory=StyleBlock)
    layers: Mapping[str, StyleBlock] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.layers) - set(LAYER_NAMES)
        if unknown:
            raise ValueError(f"Unknown theme layers: {sorted(unknown)}")
        object.__setattr__(self, "layers", MappingProxyType(dict(self.layers)))

    def layer(self, name: str) -> Optional[StyleBlock]:
        return self.layers.get(name)


__all__ = [
    "LAYER_NAMES",
    "MODES",
    "Mode",
    "ModeConfig",
    "MergedModeConfig",
    "PROPERTIES_BY_KEY",
    "STYLE_PROPERTIES",
    "StyleBlock",
    "StyleProperty",
    "THEME_KINDS",
    "ThemeKind",
    "ThemeOverride",
    "block_from_values",
]
