from __future__ import annotations

from typing import Any

import pytest

from mode_styles.styles import ModeConfig, StyleBlock, parse_mode_config, unknown_keys


@pytest.mark.parametrize("raw", [None, 3, "text", ["border"], ("a", "b")])
def test_non_mapping_raw_config_is_empty(raw: Any) -> None:
    assert parse_mode_config(raw) == ModeConfig()


def test_common_and_layers_are_split() -> None:
    config = parse_mode_config(
        {
            "border": "1px solid red",
            "dark": {"color": "#fff"},
            "highContrastLight": {"outline": "2px"},
        }
    )

    assert config.common == StyleBlock(border="1px solid red")
    assert set(config.layers) == {"dark", "highContrastLight"}
    assert config.layer("dark") == StyleBlock(color="#fff")
    assert config.layer("light") is None


def test_non_string_values_are_absent() -> None:
    config = parse_mode_config({"border": 2, "color": None, "cursor": "text"})

    assert config.common == StyleBlock(cursor="text")


def test_malformed_layers_are_absent() -> None:
    config = parse_mode_config({"dark": "oops", "light": 4, "highContrastDark": []})

    assert config.layers == {}


@pytest.mark.parametrize(
    ("key", "layer"),
    [
        ("[dark]", "dark"),
        ("[light]", "light"),
        ("[highContrastDark]", "highContrastDark"),
        ("darkHC", "highContrastDark"),
        ("lightHC", "highContrastLight"),
    ],
)
def test_layer_aliases(key: str, layer: str) -> None:
    config = parse_mode_config({key: {"border": "alias"}})

    assert config.layer(layer) == StyleBlock(border="alias")


def test_canonical_layer_name_wins_over_aliases() -> None:
    config = parse_mode_config(
        {
            "darkHC": {"border": "short"},
            "[highContrastDark]": {"border": "bracketed"},
            "highContrastDark": {"border": "canonical"},
        }
    )

    assert config.layer("highContrastDark") == StyleBlock(border="canonical")


def test_malformed_canonical_layer_falls_to_alias() -> None:
    config = parse_mode_config({"dark": "bad", "[dark]": {"border": "ok"}})

    assert config.layer("dark") == StyleBlock(border="ok")


def test_legacy_background_key() -> None:
    config = parse_mode_config(
        {
            "background": "#111",
            "dark": {"background": "#222", "backgroundColor": "#333"},
        }
    )

    assert config.common.background_color == "#111"
    assert config.layer("dark") == StyleBlock(background_color="#333")


def test_unknown_keys_reports_ignored_entries() -> None:
    raw = {
        "border": "ok",
        "borderColour": "typo",
        "cursor": 5,
        "dark": {"color": "#fff", "isWholeLine": True},
        "light": "not-a-layer",
    }

    assert unknown_keys(raw) == (
        "borderColour",
        "cursor",
        "dark.isWholeLine",
        "light",
    )


def test_unknown_keys_tolerates_non_mappings() -> None:
    assert unknown_keys(None) == ()
    assert unknown_keys([1, 2]) == ()


def test_mode_config_rejects_unknown_layer_names() -> None:
    with pytest.raises(ValueError):
        ModeConfig(layers={"sepia": StyleBlock()})
