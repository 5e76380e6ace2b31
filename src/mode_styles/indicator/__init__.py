"""Mode detection and the controller that drives the line indicator."""

from .controller import (
    DEFAULT_DEBOUNCE_MS,
    EditorSnapshot,
    IndicatorHooks,
    LineIndicatorController,
)
from .detection import CursorStyle, detect_mode

__all__ = [
    "CursorStyle",
    "DEFAULT_DEBOUNCE_MS",
    "EditorSnapshot",
    "IndicatorHooks",
    "LineIndicatorController",
    "detect_mode",
]
