from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from mode_styles.cli import EXIT_OK, EXIT_USAGE, main


def write_settings(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def run(*argv: str) -> tuple[int, str, str]:
    out = io.StringIO()
    err = io.StringIO()
    code = main(list(argv), out=out, err=err)
    return code, out.getvalue(), err.getvalue()


def test_resolve_single_mode_with_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MODE_STYLES_SETTINGS", raising=False)

    code, out, _ = run("resolve", "--mode", "normal")

    assert code == EXIT_OK
    assert json.loads(out) == {
        "theme": "dark",
        "styles": {
            "backgroundColor": "rgba(255,255,255,0)",
            "border": "2px dotted #00aa00",
        },
    }


def test_resolve_all_modes_from_settings_file(tmp_path: Path) -> None:
    settings = write_settings(
        tmp_path,
        {
            "modalLineIndicator.insertMode": {
                "light": {"border": "1px solid #000"},
                "highContrastLight": {"borderWidth": "3px"},
            }
        },
    )

    code, out, _ = run("resolve", "--settings", str(settings), "--theme", "hc-light")

    payload = json.loads(out)
    assert code == EXIT_OK
    assert payload["theme"] == "highContrastLight"
    assert set(payload["styles"]) == {"normal", "insert", "visual", "search"}
    assert payload["styles"]["insert"]["border"] == "1px solid #000"
    assert payload["styles"]["insert"]["borderWidth"] == "3px"


def test_resolve_explain_reports_sources(tmp_path: Path) -> None:
    settings = write_settings(
        tmp_path, {"modalLineIndicator": {"visualMode": {"color": "#fafafa"}}}
    )

    code, out, _ = run(
        "resolve", "--settings", str(settings), "--mode", "visual", "--explain"
    )

    styles = json.loads(out)["styles"]
    assert code == EXIT_OK
    assert styles["color"] == {"value": "#fafafa", "source": "common"}
    assert styles["border"] == {"value": "2px dashed #0000aa", "source": "default"}
    assert "cursor" not in styles


def test_unknown_theme_resolves_as_dark() -> None:
    code, out, _ = run("resolve", "--mode", "search", "--theme", "sepia")

    assert code == EXIT_OK
    assert json.loads(out)["theme"] == "dark"


def test_missing_settings_file_is_reported(tmp_path: Path) -> None:
    code, out, err = run("resolve", "--settings", str(tmp_path / "nope.json"))

    assert code == EXIT_USAGE
    assert out == ""
    assert err.startswith("mode-styles: Cannot read settings")


def test_invalid_mode_is_a_usage_error() -> None:
    code, _, _ = run("resolve", "--mode", "command")

    assert code == EXIT_USAGE


def test_log_file_clear(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    log_path = tmp_path / "logs" / "mode-styles.log"
    monkeypatch.setenv("MODE_STYLES_LOG_FILE", str(log_path))
    monkeypatch.setattr("mode_styles.runtime.telemetry._ACTIVE_LOG_FILE", None)

    code, out, _ = run("log-file", "--clear")

    assert code == EXIT_OK
    assert out.strip() == str(log_path)
    assert log_path.read_text(encoding="utf-8") == ""
