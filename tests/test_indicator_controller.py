from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import pytest

from mode_styles.indicator import (
    CursorStyle,
    EditorSnapshot,
    IndicatorHooks,
    LineIndicatorController,
)
from mode_styles.runtime import telemetry
from mode_styles.settings import ConfigurationChange, SettingsStore
from mode_styles.styles import DEFAULT_STYLES, HostThemeKind


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


class Recorder:
    def __init__(self) -> None:
        self.applied: List[tuple[str, Dict[str, Any], int]] = []
        self.clears = 0
        self.notices: List[str] = []
        self.logs: List[str] = []

    def hooks(self) -> IndicatorHooks:
        return IndicatorHooks(
            apply_style=self._apply,
            clear_styles=self._clear,
            notify=self.notices.append,
            log=self.logs.append,
        )

    def _apply(self, mode: str, style: Mapping[str, object], line: int) -> None:
        self.applied.append((mode, dict(style), line))

    def _clear(self) -> None:
        self.clears += 1


def make_controller(
    store: Optional[SettingsStore] = None,
    *,
    theme_signal: object = HostThemeKind.DARK,
) -> tuple[LineIndicatorController, Recorder, FakeClock, SettingsStore]:
    store = store or SettingsStore()
    recorder = Recorder()
    clock = FakeClock()
    controller = LineIndicatorController(
        store,
        recorder.hooks(),
        theme_signal=theme_signal,
        debounce_ms=10,
        clock=clock,
    )
    return controller, recorder, clock, store


def normal_snapshot(line: int = 3) -> EditorSnapshot:
    return EditorSnapshot(cursor_style=CursorStyle.BLOCK, cursor_line=line, name="a.py")


def test_styles_are_resolved_on_construction() -> None:
    store = SettingsStore(values={"normalMode": {"dark": {"border": "dark-border"}}})

    controller, _, _, _ = make_controller(store)

    assert controller.styles["normal"].border == "dark-border"
    assert controller.styles["insert"] == DEFAULT_STYLES["insert"]


def test_selection_updates_are_debounced() -> None:
    controller, recorder, clock, _ = make_controller()

    controller.on_selection_change(normal_snapshot(1))
    controller.on_selection_change(normal_snapshot(2))

    assert controller.process_timeouts() is None
    assert recorder.applied == []

    clock.advance(15)
    assert controller.process_timeouts() == "normal"
    assert len(recorder.applied) == 1
    mode, style, line = recorder.applied[0]
    assert (mode, line) == ("normal", 2)
    assert style["border"] == "2px dotted #00aa00"
    assert style["isWholeLine"] is True
    assert controller.current_mode == "normal"


def test_render_clears_previous_decorations_first() -> None:
    controller, recorder, _, _ = make_controller()

    controller.on_selection_change(normal_snapshot())
    controller.force_update()

    assert recorder.clears == 1
    assert controller.has_pending_update is False


def test_theme_change_reloads_and_rerenders() -> None:
    store = SettingsStore(
        values={
            "normalMode": {
                "dark": {"border": "dark"},
                "highContrastDark": {"borderWidth": "4px"},
            }
        }
    )
    controller, recorder, _, _ = make_controller(store)
    controller.on_selection_change(normal_snapshot())
    controller.force_update()

    controller.on_theme_change(HostThemeKind.HIGH_CONTRAST)

    assert controller.theme_kind == "highContrastDark"
    _, style, _ = recorder.applied[-1]
    assert style["border"] == "dark"
    assert style["borderWidth"] == "4px"


def test_configuration_change_reloads_styles() -> None:
    controller, recorder, _, store = make_controller()
    controller.on_selection_change(normal_snapshot())
    controller.force_update()

    store.update("normalMode", {"border": "5px solid #abcdef"})

    assert controller.styles["normal"].border == "5px solid #abcdef"
    _, style, _ = recorder.applied[-1]
    assert style["border"] == "5px solid #abcdef"


def test_foreign_namespace_changes_are_ignored() -> None:
    store = SettingsStore(namespace="otherExtension")
    controller, _, _, _ = make_controller(store)
    before = controller.styles

    controller.on_configuration_change(
        ConfigurationChange(("modalLineIndicator.normalMode",))
    )

    assert controller.styles == before


def test_disabling_clears_and_blocks_updates() -> None:
    controller, recorder, clock, store = make_controller()
    controller.on_selection_change(normal_snapshot())

    store.update("enabled", False)
    clock.advance(50)

    assert controller.enabled is False
    assert controller.process_timeouts() is None
    assert recorder.applied == []
    assert recorder.clears == 1


def test_toggle_enabled_persists_and_notifies() -> None:
    controller, recorder, _, store = make_controller()
    controller.on_selection_change(normal_snapshot())

    assert controller.toggle_enabled() is False
    assert store.enabled is False
    assert recorder.notices[-1] == "Line indicator: Disabled"

    assert controller.toggle_enabled() is True
    assert store.enabled is True
    assert controller.has_pending_update is True
    assert recorder.notices[-1] == "Line indicator: Enabled"


def test_poll_schedules_only_on_mode_drift() -> None:
    controller, _, _, _ = make_controller()

    assert controller.poll(EditorSnapshot(cursor_style=CursorStyle.LINE)) is False
    assert controller.poll(normal_snapshot()) is True
    assert controller.force_update() == "normal"
    assert controller.poll(normal_snapshot(7)) is False


def test_query_mode_reports_description() -> None:
    controller, recorder, _, _ = make_controller()

    message = controller.query_mode(
        EditorSnapshot(cursor_style=CursorStyle.UNDERLINE)
    )

    assert message == "Current Mode: SEARCH (yellow solid)"
    assert recorder.notices == [message]
    assert controller.query_mode() == "Current Mode: INSERT (red solid)"


def test_editor_change_without_editor_is_ignored() -> None:
    controller, _, _, _ = make_controller()

    controller.on_editor_change(None)

    assert controller.has_pending_update is False


def test_dispose_unsubscribes() -> None:
    controller, recorder, _, store = make_controller()

    controller.dispose()
    store.update("normalMode", {"border": "after-dispose"})

    assert recorder.clears == 1
    assert controller.styles["normal"] == DEFAULT_STYLES["normal"]


def test_log_hook_receives_state_lines() -> None:
    controller, recorder, _, _ = make_controller()

    controller.on_selection_change(normal_snapshot())
    controller.force_update()

    assert any(line.startswith("reload ->") for line in recorder.logs)
    assert any(line.startswith("render ->") for line in recorder.logs)


def test_log_level_change_reconfigures_telemetry_without_reload(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    controller, recorder, _, store = make_controller()
    configured: List[Dict[str, Any]] = []
    monkeypatch.setattr(
        telemetry, "configure", lambda **kwargs: configured.append(kwargs)
    )
    reloads = sum(line.startswith("reload ->") for line in recorder.logs)

    store.update("logLevel", "debug")

    assert configured == [{"level": "debug"}]
    assert sum(line.startswith("reload ->") for line in recorder.logs) == reloads
    assert controller.styles["normal"] == DEFAULT_STYLES["normal"]
