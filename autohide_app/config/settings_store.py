"""
Settings stores holding the engine's enable flag.

Reads are asynchronous and change notifications are delivered synchronously
as ``(changes, area)`` where ``changes`` maps each changed key to a
``StorageChange``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

import orjson
import structlog

from ..errors import ConfigurationUnavailableError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StorageChange:
    """One key's transition inside a change notification."""
    key: str
    old_value: Any = None
    new_value: Any = None


ChangeListener = Callable[[dict[str, StorageChange], str], Any]


class SettingsStore(Protocol):
    """Asynchronous key/value store with change notifications."""

    async def get(self, key: str, default: Any = None) -> Any:
        ...

    def add_change_listener(self, listener: ChangeListener) -> None:
        ...

    def remove_change_listener(self, listener: ChangeListener) -> None:
        ...


class InMemorySettingsStore:
    """Settings store kept in a dictionary."""

    def __init__(self, initial: Optional[dict[str, Any]] = None, area: str = "sync") -> None:
        self.area = area
        self._values: dict[str, Any] = dict(initial or {})
        self._listeners: list[ChangeListener] = []

    async def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        self.set_now(key, value)

    def set_now(self, key: str, value: Any) -> None:
        """Write a value and notify listeners within the current turn."""
        old_value = self._values.get(key)
        self._values[key] = value
        self._persist()
        self._notify({key: StorageChange(key=key, old_value=old_value, new_value=value)})

    def remove_now(self, key: str) -> None:
        if key not in self._values:
            return
        old_value = self._values.pop(key)
        self._persist()
        self._notify({key: StorageChange(key=key, old_value=old_value, new_value=None)})

    def add_change_listener(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def listener_count(self) -> int:
        return len(self._listeners)

    def _persist(self) -> None:
        pass

    def _notify(self, changes: dict[str, StorageChange]) -> None:
        for listener in list(self._listeners):
            listener(changes, self.area)


class JsonFileSettingsStore(InMemorySettingsStore):
    """Settings store persisted as a JSON object on disk."""

    def __init__(self, path: Path, area: str = "sync") -> None:
        self.path = Path(path)
        super().__init__(initial=None, area=area)
        self._loaded = False

    async def get(self, key: str, default: Any = None) -> Any:
        self._ensure_loaded()
        return self._values.get(key, default)

    def set_now(self, key: str, value: Any) -> None:
        self._ensure_loaded()
        super().set_now(key, value)

    def remove_now(self, key: str) -> None:
        self._ensure_loaded()
        super().remove_now(key)

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self._values = self._load()
            self._loaded = True

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            data = orjson.loads(self.path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as e:
            raise ConfigurationUnavailableError(
                f"Cannot read settings file {self.path}: {e}",
                source=str(self.path),
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationUnavailableError(
                f"Settings file {self.path} does not hold a JSON object",
                source=str(self.path),
            )
        return data

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(orjson.dumps(self._values, option=orjson.OPT_INDENT_2))
        logger.debug("Persisted settings", path=str(self.path), keys=sorted(self._values))
