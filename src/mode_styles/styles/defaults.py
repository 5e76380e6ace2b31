"""Built-in styles that back every mode when nothing is configured."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .models import MODES, MergedModeConfig

TRANSPARENT = "rgba(255,255,255,0)"

DEFAULT_STYLES: Mapping[str, MergedModeConfig] = MappingProxyType(
    {
        "normal": MergedModeConfig(
            background_color=TRANSPARENT, border="2px dotted #00aa00"
        ),
        "insert": MergedModeConfig(
            background_color=TRANSPARENT, border="2px solid #aa0000"
        ),
        "visual": MergedModeConfig(
            background_color=TRANSPARENT, border="2px dashed #0000aa"
        ),
        "search": MergedModeConfig(
            background_color=TRANSPARENT, border="2px solid #aaaa00"
        ),
    }
)

# Short human-readable descriptions used by mode queries.
MODE_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "normal": "green dotted",
        "insert": "red solid",
        "visual": "blue dashed",
        "search": "yellow solid",
    }
)


def defaults_for_mode(mode: str) -> MergedModeConfig:
    try:
        return DEFAULT_STYLES[mode]
    except KeyError as exc:
        raise ValueError(
            f"Unknown mode '{mode}'; expected one of {', '.join(MODES)}"
        ) from exc


__all__ = ["DEFAULT_STYLES", "MODE_DESCRIPTIONS", "TRANSPARENT", "defaults_for_mode"]
