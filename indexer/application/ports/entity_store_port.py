from __future__ import annotations

from typing import Any, Protocol, TypeVar


RecordT = TypeVar("RecordT")


class EntityStorePort(Protocol):
    def load(self, kind: type[RecordT], entity_id: str) -> RecordT | None:
        ...

    def save(self, record: Any) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
