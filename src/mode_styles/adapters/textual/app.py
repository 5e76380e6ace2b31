"""Textual app previewing resolved mode styles per theme kind."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

try:  # pragma: no cover - imported only when the preview is run
    from textual.app import App, ComposeResult
    from textual.widgets import DataTable, Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use mode_styles.adapters.textual.app"
    ) from exc

from mode_styles.runtime import telemetry
from mode_styles.settings import SettingsError, SettingsStore, load_settings_file
from mode_styles.styles import (
    MODES,
    STYLE_PROPERTIES,
    THEME_KINDS,
    MergedModeConfig,
    StyleResolver,
    ThemeKind,
    fallback_chain,
)


def next_theme_kind(kind: ThemeKind) -> ThemeKind:
    index = THEME_KINDS.index(kind)
    return THEME_KINDS[(index + 1) % len(THEME_KINDS)]


class StylePreviewApp(App[None]):
    """Table of resolved properties, one column per mode."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#styles {
		height: 1fr;
		border: round $accent;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("t", "cycle_theme", "Next theme"),
        ("r", "reload", "Reload settings"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        settings_path: Optional[Path] = None,
        theme_kind: ThemeKind = "dark",
    ) -> None:
        super().__init__()
        self._settings_path = settings_path
        self._theme_kind: ThemeKind = theme_kind
        self._store = SettingsStore()
        self._resolver = StyleResolver(logger_name="mode_styles.preview")
        self._table: DataTable | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._table = DataTable(id="styles", zebra_stripes=True)
        yield self._table
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        if self._table is not None:
            self._table.add_columns("property", *MODES)
        self.action_reload()

    def action_cycle_theme(self) -> None:
        self._theme_kind = next_theme_kind(self._theme_kind)
        telemetry.record_event("preview.theme", data={"kind": self._theme_kind})
        self._refresh_table()

    @property
    def settings_store(self) -> SettingsStore:
        return self._store

    def action_reload(self) -> None:
        if self._settings_path is not None:
            try:
                values = load_settings_file(
                    self._settings_path, namespace=self._store.namespace
                )
            except SettingsError as exc:
                self._update_status(f"settings error: {exc}")
                return
            self._store.replace_all(values)
        self._refresh_table()

    def status_text(self) -> str:
        chain = " -> ".join(fallback_chain(self._theme_kind))
        return (
            f"theme: {self._theme_kind} | chain: {chain}"
            f" | settings rev {self._store.revision()}"
        )

    def _refresh_table(self) -> None:
        styles = self._resolver.resolve_all(
            self._store.mode_configs(), self._theme_kind
        )
        if self._table is not None:
            self._table.clear()
            for row in preview_rows(styles):
                self._table.add_row(*row)
        self._update_status(self.status_text())

    def _update_status(self, text: str) -> None:
        if self._status is not None:
            self._status.update(text)


def preview_rows(styles: Dict[str, MergedModeConfig]) -> list[tuple[str, ...]]:
    """Rows for every property that resolved to a value in any mode."""

    rows: list[tuple[str, ...]] = []
    for prop in STYLE_PROPERTIES:
        values = tuple(prop.read(styles[mode]) or "" for mode in MODES)
        if any(values):
            rows.append((prop.key, *values))
    return rows


def run_preview(
    settings_path: Optional[Path] = None, theme_kind: ThemeKind = "dark"
) -> None:  # pragma: no cover - manual demo
    StylePreviewApp(settings_path=settings_path, theme_kind=theme_kind).run()


__all__ = ["StylePreviewApp", "next_theme_kind", "preview_rows", "run_preview"]
