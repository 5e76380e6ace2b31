"""Command-line entry point for resolving and previewing mode styles."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, TextIO

from mode_styles.runtime import telemetry
from mode_styles.settings import SettingsError, SettingsStore
from mode_styles.styles import MODES, StyleResolver, classify_theme

EXIT_OK = 0
EXIT_USAGE = 2


def _load_store(path: Optional[str]) -> SettingsStore:
    if path is None:
        return SettingsStore()
    return SettingsStore.from_json(path)


def _cmd_resolve(args: argparse.Namespace, out: TextIO) -> int:
    store = _load_store(args.settings)
    resolver = StyleResolver(logger_name="mode_styles.cli")
    modes = (args.mode,) if args.mode else MODES
    result: Dict[str, Any] = {}
    for mode in modes:
        raw = store.mode_config(mode)
        if args.explain:
            result[mode] = {
                key: {"value": value, "source": source}
                for key, (value, source) in resolver.explain(
                    mode, raw, args.theme
                ).items()
                if value is not None
            }
        else:
            result[mode] = resolver.resolve(mode, raw, args.theme).as_dict()
    payload = result[args.mode] if args.mode else result
    json.dump(
        {"theme": classify_theme(args.theme), "styles": payload},
        out,
        indent=2,
    )
    out.write("\n")
    return EXIT_OK


def _cmd_preview(args: argparse.Namespace, out: TextIO) -> int:
    del out
    from mode_styles.adapters.textual import run_preview

    settings_path = Path(args.settings) if args.settings else None
    run_preview(settings_path, classify_theme(args.theme))
    return EXIT_OK


def _cmd_log_file(args: argparse.Namespace, out: TextIO) -> int:
    path = telemetry.clear_log_file() if args.clear else telemetry.log_file_path()
    out.write(f"{path}\n")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mode-styles",
        description="Resolve theme-aware line indicator styles per editing mode.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    resolve = sub.add_parser("resolve", help="Print resolved styles as JSON")
    resolve.add_argument(
        "--settings",
        default=os.environ.get("MODE_STYLES_SETTINGS"),
        help="Settings JSON file (default: $MODE_STYLES_SETTINGS, else built-ins)",
    )
    resolve.add_argument("--mode", choices=MODES, help="Resolve a single mode")
    resolve.add_argument(
        "--theme",
        default="dark",
        help="Theme kind or host theme id (unknown values resolve as dark)",
    )
    resolve.add_argument(
        "--explain",
        action="store_true",
        help="Include the layer each value was resolved from",
    )
    resolve.set_defaults(handler=_cmd_resolve)

    preview = sub.add_parser("preview", help="Open the Textual style preview")
    preview.add_argument(
        "--settings", default=os.environ.get("MODE_STYLES_SETTINGS")
    )
    preview.add_argument("--theme", default="dark")
    preview.set_defaults(handler=_cmd_preview)

    log_file = sub.add_parser("log-file", help="Show the telemetry log file path")
    log_file.add_argument(
        "--clear", action="store_true", help="Truncate the log file first"
    )
    log_file.set_defaults(handler=_cmd_log_file)

    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return EXIT_OK if exc.code == 0 else EXIT_USAGE
    try:
        return args.handler(args, out)
    except SettingsError as exc:
        location = f" ({exc.path})" if exc.path else ""
        err.write(f"mode-styles: {exc}{location}\n")
        return EXIT_USAGE
    except OSError as exc:
        err.write(f"mode-styles: {exc}\n")
        return EXIT_USAGE


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
