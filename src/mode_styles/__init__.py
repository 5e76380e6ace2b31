"""Theme-aware style resolution for modal-editing line indicators."""

from .styles import MergedModeConfig, StyleResolver, resolve_mode_style

__all__ = [
    "adapters",
    "cli",
    "indicator",
    "runtime",
    "settings",
    "styles",
    "MergedModeConfig",
    "StyleResolver",
    "resolve_mode_style",
]

__version__ = "0.1.0"
