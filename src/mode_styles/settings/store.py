"""In-memory, namespaced settings store with change notifications."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from mode_styles.runtime.telemetry import SETTINGS_LEVELS, record_event
from mode_styles.styles.models import MODES

DEFAULT_NAMESPACE = "modalLineIndicator"
DEFAULT_LOG_LEVEL = "error"

_MISSING = object()


class SettingsError(RuntimeError):
    """Raised when a settings source cannot be read."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


@dataclass(frozen=True, slots=True)
class ConfigurationChange:
    """Fully qualified keys touched by one store update."""

    keys: tuple[str, ...]

    def affects(self, section: str) -> bool:
        for key in self.keys:
            if key == section:
                return True
            if key.startswith(f"{section}.") or section.startswith(f"{key}."):
                return True
        return False


Listener = Callable[[ConfigurationChange], None]


def mode_key(mode: str) -> str:
    if mode not in MODES:
        raise ValueError(f"Unknown mode '{mode}'")
    return f"{mode}Mode"


class SettingsStore:
    """Holds the extension's settings; the resolution core only reads them."""

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        values: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if not namespace:
            raise ValueError("namespace cannot be empty")
        self.namespace = namespace
        self._values: Dict[str, Any] = {}
        self._listeners: list[Listener] = []
        self._revision = 0
        for key, value in (values or {}).items():
            self._values[self._normalize(key)] = copy.deepcopy(value)

    @classmethod
    def from_json(
        cls, path: str | Path, *, namespace: str = DEFAULT_NAMESPACE
    ) -> "SettingsStore":
        return cls(namespace, load_settings_file(path, namespace=namespace))

    def revision(self) -> int:
        return self._revision

    def get(self, key: str, default: Any = None) -> Any:
        """Return a deep copy so callers hold a stable snapshot."""

        value = self._values.get(self._normalize(key), _MISSING)
        if value is _MISSING:
            return default
        return copy.deepcopy(value)

    def update(self, key: str, value: Any) -> bool:
        """Set ``key``; returns ``False`` (and stays silent) when unchanged."""

        if value is None:
            return self.reset(key)
        normalized = self._normalize(key)
        if self._values.get(normalized, _MISSING) == value:
            return False
        self._values[normalized] = copy.deepcopy(value)
        self._notify((normalized,))
        return True

    def reset(self, key: str) -> bool:
        normalized = self._normalize(key)
        if normalized not in self._values:
            return False
        del self._values[normalized]
        self._notify((normalized,))
        return True

    def replace_all(self, values: Mapping[str, Any]) -> bool:
        """Swap the whole store contents, notifying once for changed keys."""

        incoming = {self._normalize(key): copy.deepcopy(v) for key, v in values.items()}
        changed = sorted(
            key
            for key in set(incoming) | set(self._values)
            if incoming.get(key, _MISSING) != self._values.get(key, _MISSING)
        )
        if not changed:
            return False
        self._values = incoming
        self._notify(tuple(changed))
        return True

    def mode_config(self, mode: str) -> Any:
        return self.get(mode_key(mode))

    def mode_configs(self) -> Dict[str, Any]:
        return {mode: self.mode_config(mode) for mode in MODES}

    @property
    def enabled(self) -> bool:
        value = self._values.get("enabled", True)
        return value if isinstance(value, bool) else True

    @property
    def log_level(self) -> str:
        value = self._values.get("logLevel", DEFAULT_LOG_LEVEL)
        if isinstance(value, str) and value.lower() in SETTINGS_LEVELS:
            return value.lower()
        return DEFAULT_LOG_LEVEL

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _normalize(self, key: str) -> str:
        prefix = f"{self.namespace}."
        if key.startswith(prefix):
            key = key[len(prefix) :]
        if not key:
            raise ValueError("settings key cannot be empty")
        return key

    def _notify(self, keys: Iterable[str]) -> None:
        self._revision += 1
        change = ConfigurationChange(
            tuple(f"{self.namespace}.{key}" for key in keys)
        )
        record_event(
            "settings.change",
            level="debug",
            data={"keys": ",".join(change.keys), "revision": self._revision},
        )
        for listener in list(self._listeners):
            listener(change)


def load_settings_file(
    path: str | Path, *, namespace: str = DEFAULT_NAMESPACE
) -> Dict[str, Any]:
    """Read the namespace's entries from a host-style settings JSON file.

    Accepts flat dotted keys (``"<namespace>.normalMode"``) as well as a
    nested ``{"<namespace>": {...}}`` section. Keys of other namespaces are
    ignored.
    """

    file_path = Path(path)
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SettingsError(f"Cannot read settings: {exc}", path=file_path) from exc
    except json.JSONDecodeError as exc:
        raise SettingsError(
            f"Invalid JSON in settings (line {exc.lineno}): {exc.msg}",
            path=file_path,
        ) from exc

    if not isinstance(raw, dict):
        raise SettingsError("Settings file must contain a JSON object", path=file_path)

    values: Dict[str, Any] = {}
    section = raw.get(namespace)
    if isinstance(section, dict):
        values.update(section)
    prefix = f"{namespace}."
    for key, value in raw.items():
        if isinstance(key, str) and key.startswith(prefix):
            values[key[len(prefix) :]] = value
    return values


__all__ = [
    "ConfigurationChange",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_NAMESPACE",
    "Listener",
    "SettingsError",
    "SettingsStore",
    "load_settings_file",
    "mode_key",
]
