"""Controller wiring editor, theme and settings events to style rendering."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional

from mode_styles.runtime import telemetry
from mode_styles.settings import ConfigurationChange, SettingsStore
from mode_styles.styles import (
    MODE_DESCRIPTIONS,
    HostThemeKind,
    MergedModeConfig,
    Mode,
    StyleResolver,
    ThemeKind,
    classify_theme,
)

from .detection import detect_mode

DEFAULT_DEBOUNCE_MS = 10


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class EditorSnapshot:
    """State of the active editor needed to pick and place the indicator."""

    cursor_style: Optional[int] = None
    has_selection: bool = False
    cursor_line: int = 0
    name: str = ""


@dataclass(slots=True)
class IndicatorHooks:
    """Callbacks the controller uses to reach the host renderer."""

    apply_style: Callable[[str, Mapping[str, object], int], None]
    clear_styles: Callable[[], None] = _noop
    notify: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass
class PendingUpdate:
    deadline: float
    generation: int
    snapshot: EditorSnapshot


class LineIndicatorController:
    """Keeps one resolved style per mode and highlights the cursor line.

    Styles are re-resolved on construction, on theme changes and on
    settings changes inside the store's namespace. Editor events are
    debounced: call ``process_timeouts`` from the host loop (or
    ``force_update``) to flush them.
    """

    def __init__(
        self,
        settings: SettingsStore,
        hooks: IndicatorHooks,
        *,
        theme_signal: object = HostThemeKind.DARK,
        resolver: StyleResolver | None = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if debounce_ms < 0:
            raise ValueError("debounce_ms cannot be negative")
        self.settings = settings
        self.hooks = hooks
        self.resolver = resolver or StyleResolver(logger_name="mode_styles.styles")
        self._theme_signal = theme_signal
        self._debounce_ms = debounce_ms
        self._clock = clock
        self._enabled = settings.enabled
        self._current_mode: Mode = "insert"
        self._snapshot: Optional[EditorSnapshot] = None
        self._pending: Optional[PendingUpdate] = None
        self._generation = 0
        self._styles: Dict[str, MergedModeConfig] = {}
        telemetry.configure(level=settings.log_level)
        self._unsubscribe = settings.subscribe(self.on_configuration_change)
        self.reload_styles()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def current_mode(self) -> Mode:
        return self._current_mode

    @property
    def theme_kind(self) -> ThemeKind:
        return classify_theme(self._theme_signal)

    @property
    def styles(self) -> Dict[str, MergedModeConfig]:
        return dict(self._styles)

    @property
    def has_pending_update(self) -> bool:
        return self._pending is not None

    def reload_styles(self) -> None:
        with telemetry.span(
            "indicator::reload",
            component="indicator",
            metadata={"theme": self.theme_kind},
        ):
            self._styles = self.resolver.resolve_all(
                self.settings.mode_configs(), self._theme_signal
            )
        self._log_state("reload ->", theme=self.theme_kind)
        if self._enabled and self._snapshot is not None:
            self._render(self._snapshot)

    def on_theme_change(self, theme_signal: object) -> None:
        self._theme_signal = theme_signal
        telemetry.record_event(
            "theme.change", data={"signal": theme_signal, "kind": self.theme_kind}
        )
        self.reload_styles()

    def on_configuration_change(self, change: ConfigurationChange) -> None:
        namespace = self.settings.namespace
        if not change.affects(namespace):
            return
        enabled_key = f"{namespace}.enabled"
        level_key = f"{namespace}.logLevel"
        if change.affects(enabled_key):
            self.set_enabled(self.settings.enabled)
        if change.affects(level_key):
            telemetry.configure(level=self.settings.log_level)
        if any(key not in (enabled_key, level_key) for key in change.keys):
            self.reload_styles()

    def on_selection_change(self, snapshot: EditorSnapshot) -> None:
        self._snapshot = snapshot
        if self._enabled:
            self._schedule(snapshot)

    def on_editor_change(self, snapshot: Optional[EditorSnapshot]) -> None:
        if snapshot is None:
            return
        self.on_selection_change(snapshot)

    def poll(self, snapshot: EditorSnapshot) -> bool:
        """Schedule an update when the detected mode drifted; cursor styles
        change without emitting editor events."""

        self._snapshot = snapshot
        if not self._enabled:
            return False
        detected = detect_mode(snapshot.cursor_style, snapshot.has_selection)
        if detected == self._current_mode:
            return False
        self._schedule(snapshot)
        return True

    def process_timeouts(self) -> Optional[Mode]:
        pending = self._pending
        if pending is None or pending.deadline > self._clock():
            return None
        return self._flush(pending.generation)

    def force_update(self) -> Optional[Mode]:
        if self._pending is None:
            return None
        return self._flush(self._pending.generation)

    def set_enabled(self, enabled: bool) -> None:
        if enabled == self._enabled:
            return
        self._enabled = enabled
        telemetry.record_event("indicator.enabled", data={"enabled": enabled})
        if enabled:
            if self._snapshot is not None:
                self._schedule(self._snapshot)
        else:
            self._pending = None
            self.hooks.clear_styles()

    def toggle_enabled(self) -> bool:
        enabled = not self._enabled
        self.settings.update("enabled", enabled)
        self.set_enabled(enabled)
        self.hooks.notify(f"Line indicator: {'Enabled' if enabled else 'Disabled'}")
        return enabled

    def query_mode(self, snapshot: Optional[EditorSnapshot] = None) -> str:
        current = snapshot or self._snapshot
        if current is None:
            mode: Mode = "insert"
        else:
            mode = detect_mode(current.cursor_style, current.has_selection)
        message = f"Current Mode: {mode.upper()} ({MODE_DESCRIPTIONS[mode]})"
        telemetry.record_event(
            "indicator.query", data={"mode": mode, "theme": self.theme_kind}
        )
        self.hooks.notify(message)
        return message

    def dispose(self) -> None:
        self._pending = None
        self._unsubscribe()
        self.hooks.clear_styles()
        telemetry.record_event("indicator.dispose")

    def _schedule(self, snapshot: EditorSnapshot) -> None:
        self._generation += 1
        self._pending = PendingUpdate(
            deadline=self._clock() + (self._debounce_ms / 1000.0),
            generation=self._generation,
            snapshot=snapshot,
        )

    def _flush(self, generation: int) -> Optional[Mode]:
        pending = self._pending
        if pending is None or pending.generation != generation:
            return None
        self._pending = None
        if not self._enabled:
            return None
        return self._render(pending.snapshot)

    def _render(self, snapshot: EditorSnapshot) -> Mode:
        mode = detect_mode(snapshot.cursor_style, snapshot.has_selection)
        if mode != self._current_mode:
            telemetry.record_event(
                "mode.change",
                data={
                    "from": self._current_mode,
                    "to": mode,
                    "line": snapshot.cursor_line,
                    "file": snapshot.name,
                },
            )
            self._current_mode = mode

        payload: Dict[str, object] = dict(self._styles[mode].as_dict())
        payload["isWholeLine"] = True
        with telemetry.span(
            "indicator::render",
            component="indicator",
            metadata={"mode": mode, "line": snapshot.cursor_line},
        ):
            self.hooks.clear_styles()
            self.hooks.apply_style(mode, payload, snapshot.cursor_line)
        self._log_state("render ->", mode=mode, line=snapshot.cursor_line)
        return mode

    def _log_state(self, prefix: str, **fields: object) -> None:
        try:
            parts = [prefix, f"enabled={self._enabled!r}"]
            for key, value in fields.items():
                if value is not None:
                    parts.append(f"{key}={value!r}")
            self.hooks.log(" ".join(parts))
        except Exception:
            pass


__all__ = [
    "DEFAULT_DEBOUNCE_MS",
    "EditorSnapshot",
    "IndicatorHooks",
    "LineIndicatorController",
]
