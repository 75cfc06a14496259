from __future__ import annotations

import copy
from typing import Any, TypeVar

from indexer.infrastructure.store.identity_map_store import IdentityMapEntityStore


RecordT = TypeVar("RecordT")


class InMemoryEntityStore(IdentityMapEntityStore):
    def __init__(self):
        super().__init__()
        self._records: dict[tuple[str, str], Any] = {}

    def _read(self, kind: type[RecordT], entity_id: str) -> RecordT | None:
        record = self._records.get((kind.__name__, entity_id))
        return copy.deepcopy(record) if record is not None else None

    def _write(self, records: list[Any]) -> None:
        for record in records:
            self._records[(type(record).__name__, record.id)] = copy.deepcopy(record)

    def count(self, kind: type) -> int:
        return sum(1 for name, _ in self._records if name == kind.__name__)

    def all(self, kind: type[RecordT]) -> list[RecordT]:
        return [
            copy.deepcopy(record)
            for (name, _), record in self._records.items()
            if name == kind.__name__
        ]
