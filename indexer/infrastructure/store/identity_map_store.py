from __future__ import annotations

from typing import Any, TypeVar


RecordT = TypeVar("RecordT")


class IdentityMapEntityStore:
    """Stages writes per handler and hands out one live object per record.

    Subclasses implement ``_read`` and ``_write``; ``commit`` flushes staged
    records in one batch and ``rollback`` forgets them.
    """

    def __init__(self):
        self._loaded: dict[tuple[str, str], Any] = {}
        self._dirty: dict[tuple[str, str], Any] = {}

    def load(self, kind: type[RecordT], entity_id: str) -> RecordT | None:
        key = (kind.__name__, entity_id)
        record = self._loaded.get(key)
        if record is not None:
            return record
        record = self._read(kind, entity_id)
        if record is not None:
            self._loaded[key] = record
        return record

    def save(self, record: Any) -> None:
        key = (type(record).__name__, record.id)
        self._loaded[key] = record
        self._dirty[key] = record

    def commit(self) -> None:
        if self._dirty:
            self._write(list(self._dirty.values()))
        self._dirty.clear()
        self._loaded.clear()

    def rollback(self) -> None:
        self._dirty.clear()
        self._loaded.clear()

    def _read(self, kind: type[RecordT], entity_id: str) -> RecordT | None:
        raise NotImplementedError

    def _write(self, records: list[Any]) -> None:
        raise NotImplementedError
