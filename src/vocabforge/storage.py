import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, NamedTuple, Optional

from .config import settings
from .exceptions import StorageError

logger = logging.getLogger(__name__)


# --- Key-Value Store ---
class KeyValueStore(ABC):
    """Raw string storage. Implementations raise StorageError when unavailable."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, raw: str) -> None:
        pass

    def set_many(self, items: Mapping[str, str]) -> None:
        for key, raw in items.items():
            self.set(key, raw)


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, raw: str) -> None:
        self.data[key] = raw

    def set_many(self, items: Mapping[str, str]) -> None:
        self.data.update(items)


class ReadResult(NamedTuple):
    value: Any = None
    error: Optional[StorageError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: Any) -> Any:
        if self.error is not None:
            logger.warning(f"Falling back to default for {self.error.key}: {self.error.reason}")
            return default
        return default if self.value is None else self.value


class JsonState:
    """JSON documents under prefixed keys of an optional store.

    Reads never raise: failures come back as a ReadResult error. Writes
    are dropped (and logged) when there is no working store.
    """

    def __init__(self, store: Optional[KeyValueStore], prefix: str = settings.KEY_PREFIX):
        self.store = store
        self.prefix = prefix

    def _key(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def read(self, name: str) -> ReadResult:
        key = self._key(name)
        if self.store is None:
            return ReadResult(error=StorageError(key, "no storage backend"))
        try:
            raw = self.store.get(key)
        except StorageError as e:
            return ReadResult(error=e)
        if not raw:
            return ReadResult()
        try:
            return ReadResult(value=json.loads(raw))
        except ValueError as e:
            return ReadResult(error=StorageError(key, f"corrupt JSON ({e})"))

    def write(self, name: str, value: Any) -> bool:
        return self.write_many({name: value})

    def write_many(self, values: Mapping[str, Any]) -> bool:
        """Persist several documents together. Returns False if nothing was written."""
        encoded = {self._key(name): json.dumps(value) for name, value in values.items()}
        if self.store is None:
            logger.warning(f"No storage backend, skipped write of {', '.join(encoded)}")
            return False
        try:
            self.store.set_many(encoded)
        except StorageError as e:
            logger.warning(f"Write skipped: {e}")
            return False
        return True
