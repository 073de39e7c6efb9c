from __future__ import annotations

from pathlib import Path
from typing import Protocol
import json
import logging
import os
import tempfile

from .models import Card, SetTable

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "flashcardSets"


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStorage:
    """String values keyed by name, kept in a single JSON file.

    Every write replaces the whole file: the new content goes to a temporary
    file in the same directory, which is then moved over the old one.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError:
            # Covers both UnicodeDecodeError and json.JSONDecodeError.
            logger.warning("storage file %s is not valid JSON, ignoring it", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("storage file %s does not hold a JSON object, ignoring it", self.path)
            return {}
        values = {str(k): v for k, v in data.items() if isinstance(v, str)}
        if len(values) != len(data):
            logger.warning(
                "storage file %s has %d non-text value(s), ignoring them",
                self.path,
                len(data) - len(values),
            )
        return values

    def _write_all(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


def decode_table(blob: str) -> SetTable:
    """Decode a persisted blob into a set table.

    Raises ValueError when the blob is not JSON or not shaped as a mapping of
    set name to a list of ``{"side1", "side2"}`` string objects.
    """
    data = json.loads(blob)
    if not isinstance(data, dict):
        raise ValueError("set table must be a JSON object")

    table: SetTable = {}
    for name, raw_cards in data.items():
        if not isinstance(raw_cards, list):
            raise ValueError(f"set {name!r} is not a list")
        cards = []
        for raw in raw_cards:
            if not isinstance(raw, dict):
                raise ValueError(f"set {name!r} holds a non-object card")
            if not isinstance(raw.get("side1"), str) or not isinstance(raw.get("side2"), str):
                raise ValueError(f"set {name!r} holds a card without two text sides")
            cards.append(Card.from_dict(raw))
        table[name] = cards
    return table


def encode_table(table: SetTable) -> str:
    payload = {name: [c.to_dict() for c in cards] for name, cards in table.items()}
    return json.dumps(payload, ensure_ascii=False)


class SetStore:
    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self.table: SetTable = {}

    def hydrate(self) -> None:
        blob = self.storage.get(self.key)
        if blob is None:
            self.table = {}
            return
        try:
            self.table = decode_table(blob)
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError too.
            logger.warning("stored flashcard sets are unreadable, starting empty: %s", exc)
            self.table = {}

    def _commit(self, table: SetTable) -> None:
        """Write ``table`` to storage, then make it the in-memory table.

        If the write raises, the current table is left as it was.
        """
        self.storage.set(self.key, encode_table(table))
        self.table = table
        logger.debug("persisted %d set(s) under %r", len(table), self.key)

    def save(self, name: str, cards: list[Card]) -> bool:
        if not name.strip():
            return False
        table = dict(self.table)
        table[name] = list(cards)
        self._commit(table)
        return True

    def load(self, name: str) -> list[Card]:
        return list(self.table.get(name, []))

    def delete(self, name: str) -> bool:
        if name not in self.table:
            return False
        table = dict(self.table)
        del table[name]
        self._commit(table)
        return True

    def names(self) -> list[str]:
        return list(self.table.keys())

    def __contains__(self, name: object) -> bool:
        return name in self.table

    def __len__(self) -> int:
        return len(self.table)


def open_store(path: Path, key: str = DEFAULT_STORAGE_KEY) -> SetStore:
    store = SetStore(JsonFileStorage(path), key=key)
    store.hydrate()
    return store
