"""Textual preview of resolved mode styles."""

from .app import StylePreviewApp, next_theme_kind, preview_rows, run_preview

__all__ = ["StylePreviewApp", "next_theme_kind", "preview_rows", "run_preview"]
