"""Property-level cascading resolution of mode styles.

Every property walks the same ladder independently::

    theme layers (fallback chain order) -> common block -> mode default

so a high-contrast layer may set ``borderWidth`` alone while ``border``
still comes from the base-brightness layer. The functions here are pure;
``StyleResolver`` only adds telemetry around them.
"""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional, Sequence

from mode_styles.runtime.telemetry import span

from .defaults import defaults_for_mode
from .models import (
    MODES,
    STYLE_PROPERTIES,
    MergedModeConfig,
    ModeConfig,
    StyleProperty,
    ThemeKind,
)
from .parsing import parse_mode_config, unknown_keys
from .themes import classify_theme, fallback_chain, recognize_theme

SOURCE_COMMON = "common"
SOURCE_DEFAULT = "default"
SOURCE_UNSET = "unset"

Trace = Callable[[StyleProperty, str, Optional[str]], None]


def resolve_property(
    prop: StyleProperty,
    config: ModeConfig,
    chain: Sequence[str],
    default: Optional[str],
    *,
    trace: Optional[Trace] = None,
) -> Optional[str]:
    for layer_name in chain:
        layer = config.layer(layer_name)
        if layer is None:
            continue
        value = prop.read(layer)
        if value is not None:
            if trace:
                trace(prop, layer_name, value)
            return value

    value = prop.read(config.common)
    if value is not None:
        if trace:
            trace(prop, SOURCE_COMMON, value)
        return value

    if trace:
        trace(prop, SOURCE_DEFAULT if default is not None else SOURCE_UNSET, default)
    return default


def merged_config(
    mode: str,
    config: ModeConfig,
    theme_kind: ThemeKind,
    *,
    trace: Optional[Trace] = None,
) -> MergedModeConfig:
    """Resolve every property of ``mode`` for ``theme_kind``."""

    defaults = defaults_for_mode(mode)
    chain = fallback_chain(theme_kind)
    values: Dict[str, str] = {}
    for prop in STYLE_PROPERTIES:
        value = resolve_property(
            prop, config, chain, prop.read(defaults), trace=trace
        )
        if value is not None:
            values[prop.attr] = value
    return MergedModeConfig(**values)


def resolve_mode_style(
    mode: str,
    raw_mode_config: object,
    theme_signal: object,
    *,
    trace: Optional[Trace] = None,
) -> MergedModeConfig:
    """Resolve ``mode``'s style from raw settings and the host theme signal.

    Never raises for any configuration shape or theme signal; an unknown
    ``mode`` label raises ``ValueError``.
    """

    return merged_config(
        mode,
        parse_mode_config(raw_mode_config),
        classify_theme(theme_signal),
        trace=trace,
    )


class StyleResolver:
    """Resolves mode styles while reporting each decision to telemetry."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name

    def resolve(
        self, mode: str, raw_mode_config: object, theme_signal: object
    ) -> MergedModeConfig:
        recognized = recognize_theme(theme_signal)
        theme_kind = classify_theme(theme_signal)
        with span(
            "styles::resolve",
            logger_name=self._logger_name,
            component="styles",
            metadata={"mode": mode, "theme": theme_kind},
        ) as handle:
            if recognized is None:
                handle.debug(
                    "styles::unknown_theme",
                    signal=theme_signal,
                    fallback=theme_kind,
                )
            ignored = unknown_keys(raw_mode_config)
            if ignored:
                handle.add_metadata("ignored_keys", ",".join(ignored))
            handle.add_metadata("chain", " -> ".join(fallback_chain(theme_kind)))

            def _trace(prop: StyleProperty, source: str, value: Optional[str]) -> None:
                handle.debug(
                    "styles::property", property=prop.key, source=source, value=value
                )

            return merged_config(
                mode, parse_mode_config(raw_mode_config), theme_kind, trace=_trace
            )

    def resolve_all(
        self, raw_by_mode: Mapping[str, object], theme_signal: object
    ) -> Dict[str, MergedModeConfig]:
        return {
            mode: self.resolve(mode, raw_by_mode.get(mode), theme_signal)
            for mode in MODES
        }

    def explain(
        self, mode: str, raw_mode_config: object, theme_signal: object
    ) -> Dict[str, tuple[Optional[str], str]]:
        """Map each property key to ``(value, source)`` for diagnostics."""

        sources: Dict[str, tuple[Optional[str], str]] = {}

        def _collect(prop: StyleProperty, source: str, value: Optional[str]) -> None:
            sources[prop.key] = (value, source)

        resolve_mode_style(mode, raw_mode_config, theme_signal, trace=_collect)
        return sources


__all__ = [
    "SOURCE_COMMON",
    "SOURCE_DEFAULT",
    "SOURCE_UNSET",
    "StyleResolver",
    "Trace",
    "merged_config",
    "resolve_mode_style",
    "resolve_property",
]
