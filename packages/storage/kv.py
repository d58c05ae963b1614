"""
Local key-value stores holding serialized record collections.

Both backends expose ``get``/``set``/``contains`` over string keys and
string values.  ``JsonFileKeyValueStore`` is the persistent one: the whole
key space lives in a single JSON object file that is rewritten on every
``set``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def contains(self, key: str) -> bool:
        ...


class MemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def contains(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileKeyValueStore:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read_file(self) -> dict:
        with self.path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValueError("store file does not hold a JSON object")
        return payload

    def _load(self) -> Dict[str, str]:
        if not self.path.is_file():
            return {}
        try:
            payload = self._read_file()
        except (OSError, ValueError) as exc:
            logger.warning("Unreadable store file %s: %s", self.path, exc)
            return {}
        return {key: value for key, value in payload.items() if isinstance(value, str)}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def contains(self, key: str) -> bool:
        return key in self._load()

    def keys(self) -> list[str]:
        return list(self._load())

    def set(self, key: str, value: str) -> None:
        data: dict = {}
        if self.path.is_file():
            try:
                data = self._read_file()
            except (OSError, ValueError) as exc:
                logger.error("Refusing to replace unreadable store file %s: %s", self.path, exc)
                raise RuntimeError(f"Store file {self.path} is unreadable; not overwriting it") from exc
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


__all__ = ["KeyValueStore", "MemoryKeyValueStore", "JsonFileKeyValueStore"]
